"""HTTP request/response values passed between queries and transports"""
from base64 import b64encode
from collections.abc import Mapping
from operator import attrgetter, methodcaller

__all__ = [
    "FrozenMap",
    "Request",
    "Response",
    "header_adder",
    "prefix_adder",
    "basic_auth",
    "GET",
]


class FrozenMap(Mapping):
    """A read-only mapping, used for headers and query parameters.

    Requests are shared between queries and transports,
    so their mappings may not be changed in place.
    """

    __slots__ = "_items"

    def __init__(self, items=()):
        self._items = dict(items)

    __len__ = property(attrgetter("_items.__len__"))
    __iter__ = property(attrgetter("_items.__iter__"))
    __getitem__ = property(attrgetter("_items.__getitem__"))

    def __repr__(self):
        return repr(self._items)


def _updated(mapping, extra):
    # the result has the type of ``mapping``
    return type(mapping)({**mapping, **extra})


class _Value(object):
    __slots__ = ()

    def _asdict(self):
        return {name: getattr(self, name) for name in self.__slots__}

    def __eq__(self, other):
        if isinstance(other, type(self)):
            return self._asdict() == other._asdict()
        return NotImplemented

    __hash__ = None

    def replace(self, **fields):
        """A copy, with the given fields replaced"""
        return type(self)(**dict(self._asdict(), **fields))


class Request(_Value):
    """An HTTP request against the admin API.

    The url is usually a path (``/admin/orders/1.json``) until
    a :class:`~shopify_api.session.Session` prefixes it with the shop's
    authority.

    Parameters
    ----------
    method: str
        The http method
    url: str
        The requested url or path
    content: bytes or None
        The JSON body
    params: Mapping
        query parameters
    headers: Mapping
        request headers
    """

    __slots__ = "method", "url", "content", "params", "headers"

    def __init__(
        self,
        method,
        url,
        content=None,
        params=FrozenMap(),
        headers=FrozenMap(),
    ):
        self.method = method
        self.url = url
        self.content = content
        self.params = params
        self.headers = headers

    def with_headers(self, headers):
        return self.replace(headers=_updated(self.headers, headers))

    def with_prefix(self, prefix):
        return self.replace(url=prefix + self.url)

    def __repr__(self):
        shown = {
            key: "***" if key.lower() == "authorization" else value
            for key, value in self.headers.items()
        }
        return "<Request: {} {}, params={!r}, headers={!r}>".format(
            self.method, self.url, self.params, shown
        )


class Response(_Value):
    """An HTTP response, as returned by a transport.

    Parameters
    ----------
    status_code: int
        The HTTP status code
    content: bytes or None
        The response body
    headers: Mapping
        response headers
    """

    __slots__ = "status_code", "content", "headers"

    def __init__(self, status_code, content=None, headers=FrozenMap()):
        self.status_code = status_code
        self.content = content
        self.headers = headers

    def __repr__(self):
        return "<Response: {0.status_code}, headers={0.headers!r}>".format(
            self
        )


def header_adder(headers):
    """Make a callable which adds headers to a request

    >>> func = header_adder({'Accept': 'application/json'})
    >>> func(GET('/admin/shop.json')).headers
    {'Accept': 'application/json'}
    """
    return methodcaller("with_headers", headers)


def prefix_adder(prefix):
    """Make a callable which prepends the shop's authority to a request url

    >>> func = prefix_adder('https://myshop.myshopify.com')
    >>> func(GET('/admin/shop.json')).url
    'https://myshop.myshopify.com/admin/shop.json'
    """
    return methodcaller("with_prefix", prefix)


def basic_auth(credentials):
    """Create an HTTP basic authentication callable

    Parameters
    ----------
    credentials: ~typing.Tuple[str, str]
        The (username, password)-tuple

    Returns
    -------
    ~typing.Callable[[Request], Request]
    """
    token = b64encode(":".join(credentials).encode("ascii")).decode()
    return header_adder({"Authorization": "Basic " + token})


def GET(url, params=FrozenMap(), headers=FrozenMap()):
    """Shortcut for a body-less GET request"""
    return Request("GET", url, params=params, headers=headers)
