"""DocuSign data source module."""
from apiclients.sources.external.docusign.docusign import DocuSignDataSource

__all__ = ["DocuSignDataSource"]
