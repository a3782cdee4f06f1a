from enum import Enum


class config_node_constants(Enum):
    """Constants for connector configuration paths in the key-value store"""

    DOCUSIGN = "/services/connectors/docusign/config"
    GUSTO = "/services/connectors/gusto/config"
    SENDGRID = "/services/connectors/sendgrid/config"
    ZOOM = "/services/connectors/zoom/config"


class AuthType(str, Enum):
    """Supported connector authentication types"""

    TOKEN = "TOKEN"
    API_KEY = "API_KEY"


class DefaultEndpoints(Enum):
    """Default base URLs for each vendor API (DocuSign defaults to its demo host)"""

    DOCUSIGN_BASE_PATH = "https://demo.docusign.net/restapi"
    GUSTO_BASE_URL = "https://api.gusto.com"
    SENDGRID_BASE_URL = "https://api.sendgrid.com/v3"
    ZOOM_BASE_URL = "https://api.zoom.us/v2"
