"""Wire paths of resource types, including ones nested under a parent"""
import re
import typing as t

from .errors import MissingParentReference

__all__ = ["Descriptor"]

_PLACEHOLDER = re.compile(r":(\w+)")


def pluralize(name: str) -> str:
    if name.endswith("y") and name[-2:-1] not in "aeiou":
        return name[:-1] + "ies"
    return name + "s"


def _given(value):
    return value is not None and str(value) != ""


class Descriptor:
    """How a resource type addresses itself on the wire.

    The ``prefix`` may contain ``:name`` placeholders for the ids of parent
    resources, any number of them:

    >>> images = Descriptor('image', prefix='/admin/products/:product_id/')
    >>> images.placeholders
    frozenset({'product_id'})
    >>> images.collection_path({'product_id': 7})
    ('/admin/products/7/images', {})

    Parameters
    ----------
    name: str
        singular wire name, also the root element of a single record
    prefix: str
        path template preceding the plural name
    plural: str or None
        plural wire name, derived from ``name`` if not given
    """

    __slots__ = "name", "plural", "prefix", "placeholders"

    def __init__(self, name, prefix="/admin/", plural=None):
        self.name = name
        self.plural = plural or pluralize(name)
        self.prefix = prefix if prefix.endswith("/") else prefix + "/"
        self.placeholders = frozenset(_PLACEHOLDER.findall(self.prefix))

    def resolve(
        self,
        params: t.Optional[t.Mapping[str, t.Any]] = None,
        parent_refs: t.Optional[t.Mapping[str, t.Any]] = None,
    ) -> t.Tuple[str, t.Dict[str, t.Any]]:
        """Fill in the placeholders of the prefix.

        Values are taken from ``params`` first, then from ``parent_refs``.

        Returns
        -------
        ~typing.Tuple[str, ~typing.Dict[str, ~typing.Any]]
            the resolved prefix, and the params not used as placeholders

        Raises
        ------
        MissingParentReference
            if a placeholder has no value (or an empty one) in either mapping
        """
        params = dict(params or {})
        parent_refs = parent_refs or {}

        def substitute(match):
            key = match.group(1)
            for source in params, parent_refs:
                if _given(source.get(key)):
                    return str(source[key])
            raise MissingParentReference(key, self.name)

        prefix = _PLACEHOLDER.sub(substitute, self.prefix)
        remaining = {
            k: v for k, v in params.items() if k not in self.placeholders
        }
        return prefix, remaining

    def parent_refs(self, params=None, parent_refs=None):
        """The placeholder values in effect for the given sources"""
        merged = {}
        for source in (parent_refs or {}), (params or {}):
            merged.update(
                (k, v)
                for k, v in source.items()
                if k in self.placeholders and _given(v)
            )
        return merged

    def collection_path(self, params=None, parent_refs=None):
        prefix, remaining = self.resolve(params, parent_refs)
        return prefix + self.plural, remaining

    def member_path(self, id, params=None, parent_refs=None):
        path, remaining = self.collection_path(params, parent_refs)
        return "{}/{}".format(path, id), remaining

    def action_path(self, action, id=None, params=None, parent_refs=None):
        """Path of a custom action, on one record if ``id`` is given,
        otherwise on the whole collection."""
        if id is None:
            path, remaining = self.collection_path(params, parent_refs)
        else:
            path, remaining = self.member_path(id, params, parent_refs)
        return "{}/{}".format(path, action), remaining

    def _key(self):
        return self.name, self.plural, self.prefix

    def __eq__(self, other):
        if isinstance(other, Descriptor):
            return self._key() == other._key()
        return NotImplemented

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return "Descriptor({!r}, prefix={!r})".format(self.name, self.prefix)
