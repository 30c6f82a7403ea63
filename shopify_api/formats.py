"""The JSON wire format of the admin API"""
import json
import typing as t

from .http import FrozenMap

__all__ = [
    "EXTENSION",
    "HEADERS",
    "CONTENT_HEADERS",
    "dump",
    "encode",
    "load",
    "unwrap",
]

EXTENSION = ".json"
HEADERS = FrozenMap({"Accept": "application/json"})
CONTENT_HEADERS = FrozenMap(
    {"Accept": "application/json", "Content-Type": "application/json"}
)


def dump(root: str, attributes: t.Mapping[str, t.Any]) -> bytes:
    """Serialize attributes wrapped in their root element"""
    return json.dumps({root: dict(attributes)}).encode("utf-8")


def encode(data: t.Any) -> bytes:
    """Serialize a bare payload"""
    return json.dumps(data).encode("utf-8")


def load(content: t.Optional[bytes]) -> t.Any:
    """Deserialize a response body; ``None`` for an empty one"""
    if not content or not content.strip():
        return None
    return json.loads(content.decode("utf-8"))


def unwrap(data: t.Any, root: str) -> t.Any:
    """The content of the root element, or the data itself if absent"""
    if isinstance(data, dict) and root in data:
        return data[root]
    return data
