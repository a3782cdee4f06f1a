"""SendGrid data source module."""
from apiclients.sources.external.sendgrid.sendgrid import SendGridDataSource

__all__ = ["SendGridDataSource"]
