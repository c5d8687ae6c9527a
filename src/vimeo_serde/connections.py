"""
Hypermedia connections.

Every resource returned by the API carries a ``metadata`` block whose
``connections`` section links to related resources::

    "metadata": {
        "connections": {
            "videos": {
                "uri": "/users/1/projects/2/videos",
                "options": ["GET"],
                "total": 12
            }
        }
    }

The set of connections is open-ended, while a model only cares about the ones
enumerated by its ``ConnectionKeys``. :py:class:`ConnectionsParser` picks those
out and ignores the rest.
"""

import collections.abc
import dataclasses
import enum
import logging
import types
import typing

from .converters import convert
from .request import Request
from .types import JSONObject
from .utils import Absent, JSONPointer

if typing.TYPE_CHECKING:
    from .models import Model  # noqa: F401

logger = logging.getLogger(__name__)

K = typing.TypeVar("K", bound=enum.Enum)
C = typing.TypeVar("C", bound="Connection")


@dataclasses.dataclass(frozen=True)
class Connection:
    """
    A :py:class:`Connection` describes a link from a model to a related resource
    or collection.
    """

    key: enum.Enum
    """
    The member of the owning model's ``ConnectionKeys`` this connection is stored under.
    """

    uri: str
    """
    The path of the related resource.
    """

    options: typing.Tuple[str, ...] = ()
    """
    The HTTP methods the related resource accepts.
    """

    total: typing.Optional[int] = None
    """
    The number of items in the related collection, if it is one.
    """

    extra: typing.Mapping[str, typing.Any] = dataclasses.field(
        default_factory=lambda: types.MappingProxyType({}), hash=False
    )
    """
    The properties of the wire descriptor that no field of the class consumes.
    """

    def __post_init__(self):
        object.__setattr__(self, "options", tuple(self.options))
        object.__setattr__(self, "extra", types.MappingProxyType(dict(self.extra)))

    @property
    def name(self) -> str:
        return self.key.value

    def allows(self, method: str) -> bool:
        return method.upper() in (o.upper() for o in self.options)

    def request(
        self,
        model_type: typing.Type["Model"],
        parameters: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        collection: bool = True,
    ) -> Request:
        """
        Builds a :py:class:`Request` that fetches the related resource.

        :param Type[Model] model_type: the model the response decodes into.
        :param Optional[Mapping[str, Any]] parameters: query parameters.
        :param bool collection: True if the connection points to a paginated collection.
        """
        return Request.from_link(
            self.uri,
            model_type,
            collection=collection,
        ).with_parameters(**(parameters or {}))

    @classmethod
    def from_wire(
        cls: typing.Type[C], key: enum.Enum, descr: JSONObject, pointer: JSONPointer
    ) -> typing.Optional[C]:
        """
        Builds a connection out of a wire descriptor. Properties matching the
        fields of the class are coerced into their declared types; the rest are
        kept in :py:attr:`extra`. Returns None if the descriptor has no usable ``uri``.
        """
        uri = descr.get("uri")
        if not isinstance(uri, str) or not uri:
            logger.debug("ignoring connection at %s without uri", pointer)
            return None

        fields = {f.name: f for f in dataclasses.fields(cls) if f.name not in ("key", "extra")}
        kwargs: typing.Dict[str, typing.Any] = {}
        extra: typing.Dict[str, typing.Any] = {}
        for k, v in descr.items():
            field = fields.get(k)
            if field is None:
                extra[k] = v
                continue
            try:
                value = convert(field.type, v)
            except (ValueError, TypeError):
                logger.debug("ignoring malformed property at %s: %r", pointer / k, v)
                continue
            if value is not Absent:
                kwargs[k] = value
        return cls(key=key, extra=extra, **kwargs)


class ConnectionsParser(typing.Generic[K]):
    """
    A :py:class:`ConnectionsParser` builds the connection map of a model out of
    its metadata block.

    :param Type[Enum] key_type: the connection keys of the owning model.
    :param Mapping[Enum, Type[Connection]] classes: per-key connection types.
    """

    key_type: typing.Type[K]
    classes: typing.Mapping[K, typing.Type[Connection]]

    def class_for(self, key: K) -> typing.Type[Connection]:
        return self.classes.get(key, Connection)

    def __call__(
        self, metadata: typing.Any, pointer: typing.Optional[JSONPointer] = None
    ) -> typing.Dict[K, Connection]:
        if pointer is None:
            pointer = JSONPointer()
        result: typing.Dict[K, Connection] = {}
        if not isinstance(metadata, collections.abc.Mapping):
            return result
        connections = metadata.get("connections")
        if not isinstance(connections, collections.abc.Mapping):
            return result

        for name, descr in connections.items():
            key = self._key_for(name)
            if key is None:
                logger.debug("ignoring connection %r unknown to %s", name, self.key_type.__name__)
                continue
            p = pointer / "connections" / name
            if not isinstance(descr, collections.abc.Mapping):
                logger.debug("ignoring connection at %s that is not an object", p)
                continue
            connection = self.class_for(key).from_wire(key, descr, p)
            if connection is not None:
                result[key] = connection
        return result

    def _key_for(self, name: typing.Any) -> typing.Optional[K]:
        try:
            return self.key_type(name)
        except (ValueError, TypeError):
            return None

    def __init__(
        self,
        key_type: typing.Type[K],
        classes: typing.Optional[typing.Mapping[K, typing.Type[Connection]]] = None,
    ):
        self.key_type = key_type
        self.classes = dict(classes or {})


def build_connections(
    metadata: typing.Any,
    key_type: typing.Type[K],
    classes: typing.Optional[typing.Mapping[K, typing.Type[Connection]]] = None,
) -> typing.Dict[K, Connection]:
    """
    Builds a map from the members of ``key_type`` to the connections found in
    ``metadata``. Connections under names outside ``key_type`` are ignored.
    """
    return ConnectionsParser(key_type, classes)(metadata)


def connections(model: "Model") -> typing.Mapping[enum.Enum, Connection]:
    """
    Returns the connection map of a decoded model.
    """
    return model.connections
