"""Generic resource operations: CRUD and custom actions

A :class:`ResourceClient` turns a :class:`~shopify_api.address.Descriptor`
into queries. Nothing is sent until a query is executed:

>>> products = ResourceClient(Descriptor('product'))
>>> query = products.find(632910392)
>>> query.request
<Request: GET /admin/products/632910392.json, params={}, headers=...>
>>> product = execute(query, auth=session)
"""
import logging
import typing as t
from operator import attrgetter

from . import formats
from .address import Descriptor
from .errors import ResponseError, check_response
from .http import FrozenMap, Request
from .query import Query

__all__ = [
    "ALL",
    "MEMBER",
    "COLLECTION",
    "Record",
    "Operation",
    "ResourceClient",
    "Facade",
]

logger = logging.getLogger(__name__)

T = t.TypeVar("T")

MEMBER = "member"
COLLECTION = "collection"
_SCOPES = (MEMBER, COLLECTION)


class _AllType(object):
    __slots__ = ()

    def __repr__(self):
        return "ALL"


# selector for find() returning every record
ALL = _AllType()


class Record(object):
    """One resource, as known to the caller.

    Attributes of the resource are readable and writable as
    Python attributes:

    >>> order = Record({'id': 1, 'status': 'open'})
    >>> order.status
    'open'

    Parameters
    ----------
    attributes: Mapping
        the resource's attributes
    parent_refs: Mapping
        ids of parent resources, by placeholder name (e.g. ``product_id``)
    persisted: bool
        whether the resource is known to exist on the server
    """

    __slots__ = "attributes", "parent_refs", "persisted"

    def __init__(self, attributes=(), parent_refs=(), persisted=False):
        object.__setattr__(self, "attributes", dict(attributes))
        object.__setattr__(self, "parent_refs", dict(parent_refs))
        object.__setattr__(self, "persisted", persisted)

    @property
    def id(self):
        return self.attributes.get("id")

    def load(self, attributes):
        """Replace all attributes. Fields absent from ``attributes``
        are gone afterwards."""
        object.__setattr__(self, "attributes", dict(attributes))
        return self

    def __getattr__(self, name):
        # an unset slot must not fall through to the attributes lookup
        if name.startswith("_") or name in Record.__slots__:
            raise AttributeError(name)
        try:
            return self.attributes[name]
        except KeyError:
            raise AttributeError(
                "{} has no attribute {!r}".format(type(self).__name__, name)
            ) from None

    def __setattr__(self, name, value):
        if name in Record.__slots__:
            object.__setattr__(self, name, value)
        else:
            self.attributes[name] = value

    def __eq__(self, other):
        if isinstance(other, self.__class__):
            return (self.attributes, self.parent_refs) == (
                other.attributes,
                other.parent_refs,
            )
        return NotImplemented

    __hash__ = None

    def __repr__(self):
        return "<{} {}>".format(
            type(self).__name__, "(new)" if self.id is None else self.id
        )


class Operation(Query[T]):
    """A single round trip: send ``request``, then ``parse`` the
    (successful) response.

    Responses with an unsuccessful status raise
    a :class:`~shopify_api.errors.ResponseError`.
    """

    __slots__ = "request", "parse"

    def __init__(self, request, parse):
        self.request, self.parse = request, parse

    def __iter__(self):
        response = yield self.request
        return self.parse(check_response(response))

    def __repr__(self):
        return "<Operation: {0.method} {0.url}>".format(self.request)


def _succeeded(response):
    return True


class ResourceClient(object):
    """Standard CRUD and custom actions for one resource type.

    Parameters
    ----------
    descriptor: Descriptor
        how the resource type is addressed
    model: type
        the :class:`Record` (sub)class to materialize responses into
    """

    __slots__ = "descriptor", "model"

    def __init__(self, descriptor: Descriptor, model=Record):
        self.descriptor = descriptor
        self.model = model

    def _request(self, method, path, params, content=None):
        return Request(
            method,
            path + formats.EXTENSION,
            content=content,
            params=FrozenMap(params),
            headers=(
                formats.HEADERS if content is None else formats.CONTENT_HEADERS
            ),
        )

    def materialize(self, attributes, parent_refs=None):
        """Create a persisted record from server-side attributes.

        Parent references missing from ``parent_refs`` are taken
        from like-named attributes (e.g. an image's ``product_id``).
        """
        refs = dict(parent_refs or {})
        for key in self.descriptor.placeholders:
            if key not in refs and attributes.get(key) is not None:
                refs[key] = attributes[key]
        return self.model(attributes, refs, persisted=True)

    def _one(self, parent_refs, sent=None):
        # ``sent``: the attributes to fall back on if the body is empty
        def parse(response):
            data = formats.load(response.content)
            if data is not None:
                data = formats.unwrap(data, self.descriptor.name)
            elif sent is not None:
                data = sent
            else:
                raise ResponseError(
                    response,
                    "Empty {} response for a {}".format(
                        response.status_code, self.descriptor.name
                    ),
                )
            return self.materialize(data, parent_refs)

        return parse

    def _many(self, parent_refs):
        def parse(response):
            data = formats.load(response.content)
            if data is None:
                return []
            data = formats.unwrap(data, self.descriptor.plural)
            return [self.materialize(item, parent_refs) for item in data]

        return parse

    def _into(self, record):
        def parse(response):
            data = formats.load(response.content)
            if data is not None:
                record.load(formats.unwrap(data, self.descriptor.name))
            record.persisted = True
            return record

        return parse

    def find(self, selector, params=None) -> Query:
        """Look up one record by id, or all of them with :data:`ALL`.

        Parameters
        ----------
        selector
            a record id, or :data:`ALL`
        params: Mapping or None
            parent ids for nested resources (e.g. ``blog_id``);
            anything else is sent as query filters

        Returns
        -------
        Query[Record] or Query[List[Record]]
        """
        refs = self.descriptor.parent_refs(params)
        if selector is ALL:
            path, query = self.descriptor.collection_path(params)
            return Operation(
                self._request("GET", path, query), self._many(refs)
            )
        path, query = self.descriptor.member_path(selector, params)
        return Operation(self._request("GET", path, query), self._one(refs))

    def all(self, params=None) -> Query:
        return self.find(ALL, params)

    def fetch_all(self, params=None) -> Query:
        """Every record, in a single request.

        Note
        ----
        There is no pagination: the server's page size limit applies.
        """
        return self.find(ALL, params)

    def create(self, attributes, params=None) -> Query:
        """Create a record from attributes.

        If the server answers without a body, the result holds
        the attributes as sent.
        """
        path, query = self.descriptor.collection_path(params)
        refs = self.descriptor.parent_refs(params)
        content = formats.dump(self.descriptor.name, attributes)
        return Operation(
            self._request("POST", path, query, content),
            self._one(refs, sent=dict(attributes)),
        )

    def update(self, id, attributes, params=None) -> Query:
        """Update the record with the given id"""
        path, query = self.descriptor.member_path(id, params)
        record = self.model(
            dict(attributes, id=id), self.descriptor.parent_refs(params)
        )
        return Operation(
            self._request(
                "PUT",
                path,
                query,
                formats.dump(self.descriptor.name, attributes),
            ),
            self._into(record),
        )

    def delete(self, id, params=None) -> Query:
        """Delete the record with the given id; the result is ``True``"""
        path, query = self.descriptor.member_path(id, params)
        return Operation(self._request("DELETE", path, query), _succeeded)

    def save(self, record) -> Query:
        """Create or update ``record``, loading the server's response
        into it."""
        content = formats.dump(self.descriptor.name, record.attributes)
        if record.persisted:
            path, query = self.descriptor.member_path(
                record.id, parent_refs=record.parent_refs
            )
            method = "PUT"
        else:
            path, query = self.descriptor.collection_path(
                parent_refs=record.parent_refs
            )
            method = "POST"
        return Operation(
            self._request(method, path, query, content), self._into(record)
        )

    def dispatch_action(
        self,
        name,
        scope=MEMBER,
        method="POST",
        payload=None,
        record=None,
        params=None,
    ) -> Query:
        """A custom action beyond CRUD, such as closing an order.

        Parameters
        ----------
        name: str
            the action name, appended to the resource's path
        scope: str
            :data:`MEMBER` (acting on ``record``)
            or :data:`COLLECTION` (acting on the resource type)
        method: str
            the HTTP verb
        payload: object or None
            JSON-serializable request body
        record: Record or None
            the target of a member action. Its attributes are replaced
            wholesale by the server's response.
        params: Mapping or None
            parent ids and query parameters

        Returns
        -------
        Query[Record] or Query[object]
            for member actions, the reloaded ``record``.
            For collection actions, a new record if the response holds
            one, otherwise the decoded response body.
        """
        if scope not in _SCOPES:
            raise ValueError("unknown action scope {!r}".format(scope))
        content = None if payload is None else formats.encode(payload)
        if scope == MEMBER:
            if record is None or record.id is None:
                raise ValueError(
                    "member action {!r} needs a saved record".format(name)
                )
            path, query = self.descriptor.action_path(
                name, record.id, params, record.parent_refs
            )
            parse = self._into(record)
        else:
            path, query = self.descriptor.action_path(name, params=params)
            parse = self._action_result(self.descriptor.parent_refs(params))
        logger.debug(
            "%s action %r on %s: %s %s",
            scope,
            name,
            self.descriptor.plural,
            method,
            path,
        )
        return Operation(self._request(method, path, query, content), parse)

    def _action_result(self, parent_refs):
        def parse(response):
            data = formats.load(response.content)
            if isinstance(data, dict) and self.descriptor.name in data:
                return self.materialize(
                    data[self.descriptor.name], parent_refs
                )
            return data

        return parse

    def __repr__(self):
        return "ResourceClient({!r})".format(self.descriptor)


class Facade(object):
    """Base for resource types built around a :class:`ResourceClient`.

    Subclasses add derived operations on top of the generic ones,
    which are passed through unchanged.
    """

    __slots__ = "client"

    def __init__(self, client: ResourceClient):
        self.client = client

    descriptor = property(attrgetter("client.descriptor"))
    find = property(attrgetter("client.find"))
    all = property(attrgetter("client.all"))
    fetch_all = property(attrgetter("client.fetch_all"))
    create = property(attrgetter("client.create"))
    update = property(attrgetter("client.update"))
    delete = property(attrgetter("client.delete"))
    save = property(attrgetter("client.save"))
    dispatch_action = property(attrgetter("client.dispatch_action"))

    def __repr__(self):
        return "<{} {}>".format(type(self).__name__, self.descriptor.plural)
