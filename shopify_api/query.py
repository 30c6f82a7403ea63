"""The query protocol and its execution"""
import typing as t
import urllib.request
from functools import partial

from .clients import send
from .http import basic_auth

__all__ = ["Query", "execute", "executor"]

T = t.TypeVar("T")


def _identity(obj):
    return obj


class Query(t.Generic[T]):
    """A request/response generator producing a ``T``.

    Every resource operation (``find``, ``create``, ``close``, ...)
    returns one: it yields the request it needs, receives the response,
    and returns the materialized result.
    Nothing is sent until the query is passed to :func:`execute`.
    """

    def __iter__(self):
        raise NotImplementedError()

    def __execute__(self, client, auth):
        # every yielded request is authenticated before it is sent
        gen = iter(self)
        request = next(gen)
        while True:
            response = send(client, auth(request))
            try:
                request = gen.send(response)
            except StopIteration as e:
                return e.value


def _make_auth(auth):
    if auth is None:
        return _identity
    elif callable(auth):
        return auth
    else:
        return basic_auth(auth)


def execute(query, auth=None, client=None):
    """Send the requests of a query, returning its result

    ``auth`` is usually a :class:`~shopify_api.session.Session`.
    A (username, password)-tuple, any other callable taking and returning
    a request, or ``None`` are accepted too.
    ``client`` defaults to a new :mod:`urllib` opener.
    """
    if client is None:
        client = urllib.request.build_opener()
    run = getattr(type(query), "__execute__", Query.__execute__)
    return run(query, client, _make_auth(auth))


def executor(**kwargs):
    """An :func:`execute` with bound arguments

    >>> run = executor(auth=session, client=requests.Session())
    >>> run(orders.find(450789469))
    <Order 450789469>
    """
    return partial(execute, **kwargs)
