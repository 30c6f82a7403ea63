"""Exception types raised by the library"""

__all__ = [
    "ShopifyError",
    "InvalidShopIdentifier",
    "MissingParentReference",
    "Unauthenticated",
    "ResponseError",
    "Redirection",
    "ClientError",
    "BadRequest",
    "UnauthorizedAccess",
    "ForbiddenAccess",
    "ResourceNotFound",
    "MethodNotAllowed",
    "ResourceConflict",
    "ResourceGone",
    "ResourceInvalid",
    "ServerError",
    "check_response",
]


class ShopifyError(Exception):
    """Base class for all errors raised by this library"""


class InvalidShopIdentifier(ShopifyError, ValueError):
    """The shop identifier is empty or otherwise unusable"""


class MissingParentReference(ShopifyError, LookupError):
    """A placeholder in a nested resource path could not be filled

    Parameters
    ----------
    placeholder: str
        the name of the placeholder, e.g. ``product_id``
    resource: str
        the name of the resource being addressed
    """

    def __init__(self, placeholder, resource):
        super().__init__(
            "{!r} is required to address {}".format(placeholder, resource)
        )
        self.placeholder = placeholder
        self.resource = resource


class Unauthenticated(ShopifyError):
    """The session lacks a shop url or token"""


class ResponseError(ShopifyError):
    """The server answered with an unsuccessful status,
    or with a body that cannot be materialized

    Parameters
    ----------
    response: ~shopify_api.http.Response
        the offending response
    """

    def __init__(self, response, message=None):
        super().__init__(
            message
            or "Failed with status {}".format(response.status_code)
        )
        self.response = response


class Redirection(ResponseError):
    """3xx"""

    def __str__(self):
        location = self.response.headers.get("Location")
        base = super().__str__()
        return base + " => " + location if location else base


class ClientError(ResponseError):
    """4xx not covered by a more specific class"""


class BadRequest(ClientError):
    """400"""


class UnauthorizedAccess(ClientError):
    """401"""


class ForbiddenAccess(ClientError):
    """403"""


class ResourceNotFound(ClientError):
    """404"""


class MethodNotAllowed(ClientError):
    """405"""


class ResourceConflict(ClientError):
    """409"""


class ResourceGone(ClientError):
    """410"""


class ResourceInvalid(ClientError):
    """422, the server rejected the submitted attributes"""


class ServerError(ResponseError):
    """5xx"""


_BY_STATUS = {
    400: BadRequest,
    401: UnauthorizedAccess,
    403: ForbiddenAccess,
    404: ResourceNotFound,
    405: MethodNotAllowed,
    409: ResourceConflict,
    410: ResourceGone,
    422: ResourceInvalid,
}


def check_response(response):
    """Raise the matching :class:`ResponseError` for unsuccessful responses

    Parameters
    ----------
    response: ~shopify_api.http.Response
        the response to check

    Returns
    -------
    ~shopify_api.http.Response
        the same response, if its status is 2xx
    """
    status = response.status_code
    if 200 <= status < 300:
        return response
    if 300 <= status < 400:
        raise Redirection(response)
    if status in _BY_STATUS:
        raise _BY_STATUS[status](response)
    if 400 <= status < 500:
        raise ClientError(response)
    if 500 <= status < 600:
        raise ServerError(response)
    raise ResponseError(
        response, "Unknown response status {}".format(status)
    )
