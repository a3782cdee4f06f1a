from enum import Enum


class HttpStatusCode(Enum):
    """Constants for HTTP status codes"""

    # 2xx Success
    OK = 200
    SUCCESS = 200  # Alias for OK
    CREATED = 201
    ACCEPTED = 202
    NO_CONTENT = 204

    # 3xx Redirection
    MULTIPLE_CHOICES = 300

    # 4xx Client Errors
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    TOO_MANY_REQUESTS = 429

    # 5xx Server Errors
    INTERNAL_SERVER_ERROR = 500
    NETWORK_AUTHENTICATION_REQUIRED = 511


def is_success(status: int) -> bool:
    """True for any 2xx status"""
    return HttpStatusCode.OK.value <= status < HttpStatusCode.MULTIPLE_CHOICES.value


def is_retryable(status: int) -> bool:
    """True for 429 and the 5xx range that transports retry"""
    return (
        status == HttpStatusCode.TOO_MANY_REQUESTS.value
        or HttpStatusCode.INTERNAL_SERVER_ERROR.value
        <= status
        <= HttpStatusCode.NETWORK_AUTHENTICATION_REQUIRED.value
    )
