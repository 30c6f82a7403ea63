"""Shop sessions: permission urls and signed request credentials

Example
-------

In a web application's login flow:

>>> config = Config(api_key='8b4a...', secret='c7e1...')
>>> # step 1: send the merchant to the shop to grant access
>>> redirect(Session(params['shop'], config=config).create_permission_url())
>>> # step 2: the shop redirects back with a token
>>> session = Session(params['shop'], params['t'], config=config)
>>> if session.valid:
...     shop = execute(session.shop(), auth=session)
"""
import dataclasses
import hashlib
import re
import typing as t

from .errors import InvalidShopIdentifier, Unauthenticated
from .http import basic_auth, prefix_adder

__all__ = ["Config", "Session", "normalize", "DOMAIN"]

DOMAIN = ".myshopify.com"

_PROTOCOL_PREFIX = re.compile(r"^(?:https?://)+", re.IGNORECASE)


def normalize(raw: str) -> str:
    """Normalize a shop identifier to a bare host name

    >>> normalize('https://myshop')
    'myshop.myshopify.com'
    >>> normalize('shop.example.com')
    'shop.example.com'

    Raises
    ------
    InvalidShopIdentifier
        if nothing remains of the identifier
    """
    if not raw:
        raise InvalidShopIdentifier("shop identifier is empty")
    url = _PROTOCOL_PREFIX.sub("", raw)
    if not url:
        raise InvalidShopIdentifier(
            "shop identifier {!r} has no host".format(raw)
        )
    return url if "." in url else url + DOMAIN


@dataclasses.dataclass(frozen=True)
class Config:
    """Application credentials, shared by all sessions made with it.

    Instances are immutable; derive variants with :meth:`replace`.
    """

    api_key: str
    secret: str
    protocol: str = "https"

    @classmethod
    def setup(cls, params: t.Mapping[str, str]) -> "Config":
        """Build a configuration from a mapping.

        Only ``api_key``, ``secret`` and ``protocol`` are recognized.

        Raises
        ------
        TypeError
            on unrecognized or missing keys
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(params) - known)
        if unknown:
            raise TypeError(
                "unrecognized configuration option(s): {}".format(
                    ", ".join(unknown)
                )
            )
        return cls(**params)

    def replace(self, **changes) -> "Config":
        return dataclasses.replace(self, **changes)

    def __repr__(self):
        return "Config(api_key={!r}, protocol={!r})".format(
            self.api_key, self.protocol
        )


class Session:
    """A merchant's shop, optionally with the token it granted us.

    A session is also the authentication callable for
    :func:`~shopify_api.query.execute`: it points each request at the shop
    and signs it with the computed credential.

    Parameters
    ----------
    url: str
        the shop identifier (``myshop``, ``https://myshop.myshopify.com``...)
    token: str or None
        the token returned by the shop after the merchant granted access
    config: Config
        the application credentials
    """

    __slots__ = "url", "token", "config"

    def __init__(self, url, token=None, *, config):
        self.url = normalize(url)
        self.token = token
        self.config = config

    @property
    def valid(self) -> bool:
        """Whether both url and token are present.

        This does not verify the token; only the shop can reject it.
        """
        return bool(self.url) and bool(self.token)

    def create_permission_url(self, mode: str = "w") -> str:
        """The url to send a merchant to for granting access.

        Parameters
        ----------
        mode: str
            ``r`` for read-only, ``w`` for read/write access.
            Passed along unchecked.
        """
        return "http://{}/admin/api/auth?api_key={}&mode={}".format(
            self.url, self.config.api_key, mode
        )

    @property
    def credential(self) -> str:
        """MD5 hex digest of the shared secret followed by the token"""
        token = "" if self.token is None else str(self.token)
        return hashlib.md5(
            (self.config.secret + token).encode("utf-8")
        ).hexdigest()

    @property
    def site(self) -> str:
        """The admin base url, with the credential as userinfo"""
        return "{}://{}:{}@{}/admin".format(
            self.config.protocol,
            self.config.api_key,
            self.credential,
            self.url,
        )

    def shop(self):
        """A query for this session's shop"""
        from .resources import shop

        return shop.current()

    def __call__(self, request):
        """Point a request at this shop and sign it.

        The credential travels as HTTP basic auth for the
        ``(api_key, credential)`` pair, which is what the userinfo of
        :attr:`site` amounts to.

        Raises
        ------
        Unauthenticated
            if url or token is missing
        """
        if not self.valid:
            raise Unauthenticated(
                "session for {!r} has no token".format(self.url)
            )
        authority = prefix_adder(
            "{}://{}".format(self.config.protocol, self.url)
        )
        sign = basic_auth((self.config.api_key, self.credential))
        return sign(authority(request))

    def __repr__(self):
        return "<Session {} ({})>".format(
            self.url, "valid" if self.valid else "no token"
        )
