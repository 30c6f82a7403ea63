"""Sending requests with different HTTP clients in a unified manner"""
import logging
import urllib.request
from functools import singledispatch
from urllib.error import HTTPError
from urllib.parse import urlencode

from .http import Response

__all__ = ["send"]

logger = logging.getLogger(__name__)


@singledispatch
def send(client, request):
    """Given a client, send a :class:`~shopify_api.http.Request`,
    returning a :class:`~shopify_api.http.Response`.

    A :func:`~functools.singledispatch` function.
    Network errors raised by the client propagate unchanged;
    unsuccessful HTTP statuses are returned as ordinary responses.

    Parameters
    ----------
    client: any registered client type
        The client with which to send the request.

        Client types registered by default:

        * :class:`urllib.request.OpenerDirector`
          (e.g. from :func:`~urllib.request.build_opener`)
        * :class:`requests.Session`
          (if `requests <http://docs.python-requests.org/>`_ is installed)

    request: Request
        The request to send

    Returns
    -------
    Response
        the resulting response


    Example of registering a new HTTP client:

    >>> @send.register(MyClientClass)
    ... def _send(client, request: Request) -> Response:
    ...     r = client.send(request)
    ...     return Response(r.status, r.read(), headers=r.get_headers())
    """
    raise TypeError("client {!r} not registered".format(client))


@send.register(urllib.request.OpenerDirector)
def _urllib_send(opener, req, **kwargs):
    """Send a request with an :mod:`urllib` opener"""
    if req.content and not any(
        h.lower() == "content-type" for h in req.headers
    ):
        req = req.with_headers({"Content-Type": "application/json"})
    url = req.url + "?" + urlencode(req.params) if req.params else req.url
    raw_req = urllib.request.Request(url, req.content, headers=req.headers)
    raw_req.method = req.method
    logger.debug("%s %s", req.method, req.url)
    try:
        res = opener.open(raw_req, **kwargs)
    except HTTPError as http_err:
        res = http_err
    logger.debug("%s %s -> %s", req.method, req.url, res.getcode())
    return Response(res.getcode(), content=res.read(), headers=res.headers)


try:
    import requests
except ImportError:  # pragma: no cover
    pass
else:

    @send.register(requests.Session)
    def _requests_send(session, req):
        """send a request with the `requests` library"""
        logger.debug("%s %s", req.method, req.url)
        res = session.request(
            req.method,
            req.url,
            data=req.content,
            params=req.params,
            headers=req.headers,
        )
        logger.debug("%s %s -> %s", req.method, req.url, res.status_code)
        return Response(res.status_code, res.content, headers=res.headers)
