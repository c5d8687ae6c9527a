import datetime
import enum
import types
import typing
from collections import OrderedDict

from .deferred import Deferred, resolve
from .utils import Absent, AbsentType, assert_not_none

if typing.TYPE_CHECKING:
    from .connections import Connection  # noqa: F401


class AttributeDescriptor:
    """
    An :py:class:`AttributeDescriptor` describes a single attribute of a model.

    :param Any type: the type the wire value is coerced into.
    :param str name: the attribute name.
    :param bool required: True if decoding must fail when the attribute is not supplied.
    """

    parent: typing.Optional["ModelDescriptor"] = None
    name: str
    type: typing.Any
    required: bool

    T = typing.TypeVar("T", bound="AttributeDescriptor")

    def bind(self: T, parent: "ModelDescriptor") -> T:
        self.parent = parent
        return self

    def __repr__(self) -> str:
        return (
            f"AttributeDescriptor(name={self.name!r}, type={self.type!r}, "
            f"required={self.required!r})"
        )

    def __init__(self, type: typing.Any, name: str, required: bool = False):
        self.type = type
        self.name = name
        self.required = required


ClassRef = typing.Union[typing.Type["Model"], Deferred[typing.Type["Model"]]]


class ModelDescriptor:
    """
    A :py:class:`ModelDescriptor` holds the static mapping tables of a model type.

    :param str name: the name of the model.
    :param Iterable[AttributeDescriptor] attributes: the descriptors for the attributes.
    :param Mapping[str, str] members_by_encoding_keys: wire keys that map to an attribute of a different name.
    :param Mapping[str, ClassRef] classes_by_encoding_keys: wire keys whose value is decoded into a nested model.
    :param Optional[Type[Enum]] connection_keys: the connections the model cares about.
    :param Mapping[Enum, Type[Connection]] connection_classes: per-key connection descriptor types.
    :param str metadata_key: the wire key of the metadata block.
    """

    name: str
    """
    The name of the model.
    """
    members_by_encoding_keys: typing.Mapping[str, str]
    classes_by_encoding_keys: typing.Mapping[str, ClassRef]
    connection_keys: typing.Optional[typing.Type[enum.Enum]]
    connection_classes: typing.Mapping[enum.Enum, typing.Type["Connection"]]
    metadata_key: str
    _attributes: typing.MutableMapping[str, AttributeDescriptor]
    _encoding_keys_by_members: typing.Mapping[str, str]

    @property
    def attributes(self) -> typing.Mapping[str, AttributeDescriptor]:
        """
        The mapping of attribute names to :py:class:`AttributeDescriptor`s.
        """
        return self._attributes

    def attribute_for_key(self, key: str) -> typing.Optional[AttributeDescriptor]:
        """
        Returns the descriptor of the attribute the wire key populates, or None
        if the key is not mapped.
        """
        name = self.members_by_encoding_keys.get(key)
        if name is None:
            if key in self._encoding_keys_by_members:
                return None
            name = key
        return self._attributes.get(name)

    def encoding_key_for(self, name: str) -> str:
        return self._encoding_keys_by_members.get(name, name)

    def class_for_key(self, key: str) -> typing.Optional[typing.Type["Model"]]:
        """
        Returns the model type a nested payload under the wire key decodes into,
        or None if the value is to be kept as an opaque structure.
        """
        from .exceptions import InvalidDeclarationError

        ref = self.classes_by_encoding_keys.get(key)
        if ref is None:
            return None
        class_ = resolve(ref)
        if not isinstance(class_, type) or not issubclass(class_, Model):
            raise InvalidDeclarationError(
                f'class declared for key "{key}" of "{self.name}" is not a model: {class_!r}'
            )
        return class_

    def __init__(
        self,
        name: str,
        attributes: typing.Iterable[AttributeDescriptor] = (),
        members_by_encoding_keys: typing.Optional[typing.Mapping[str, str]] = None,
        classes_by_encoding_keys: typing.Optional[typing.Mapping[str, ClassRef]] = None,
        connection_keys: typing.Optional[typing.Type[enum.Enum]] = None,
        connection_classes: typing.Optional[
            typing.Mapping[enum.Enum, typing.Type["Connection"]]
        ] = None,
        metadata_key: str = "metadata",
    ) -> None:
        self.name = name
        self._attributes = OrderedDict(
            ((assert_not_none(attr.name), attr.bind(self)) for attr in attributes)
        )
        self.members_by_encoding_keys = dict(members_by_encoding_keys or {})
        self._encoding_keys_by_members = {v: k for k, v in self.members_by_encoding_keys.items()}
        self.classes_by_encoding_keys = dict(classes_by_encoding_keys or {})
        self.connection_keys = connection_keys
        self.connection_classes = dict(connection_classes or {})
        self.metadata_key = metadata_key


M = typing.TypeVar("M", bound="Model")


class Model:
    """
    The base class for decoded API resources.

    A subclass declares its mapping tables in an inner ``Meta`` class::

        class FolderConnectionKeys(enum.Enum):
            VIDEOS = "videos"

        class Folder(Model):
            class Meta:
                attributes = {
                    "name": Attr(str),
                    "created_time": Attr(datetime.datetime),
                    "user": Attr(),
                }
                classes_by_encoding_keys = {"user": User}
                connection_keys = FolderConnectionKeys

    Instances are read-only. A declared attribute whose wire key was not present
    reads as :py:data:`~vimeo_serde.utils.Absent`.
    """

    _descriptor_: typing.ClassVar[ModelDescriptor]
    _values_: typing.Dict[str, typing.Any]
    _connections_: typing.Dict[enum.Enum, "Connection"]

    def __init_subclass__(cls, **kwargs):
        from .declarative import build_descriptor

        super().__init_subclass__(**kwargs)
        cls._descriptor_ = build_descriptor(cls)

    @classmethod
    def descriptor(cls) -> ModelDescriptor:
        return cls._descriptor_

    @classmethod
    def _from_mapping_(
        cls: typing.Type[M],
        values: typing.Mapping[str, typing.Any],
        connections: typing.Mapping[enum.Enum, "Connection"],
    ) -> M:
        obj = cls.__new__(cls)
        object.__setattr__(obj, "_values_", dict(values))
        object.__setattr__(obj, "_connections_", dict(connections))
        return obj

    @property
    def connections(self) -> typing.Mapping[enum.Enum, "Connection"]:
        """
        The connections found in the metadata block, keyed by members of
        the model's ``ConnectionKeys``.
        """
        return types.MappingProxyType(self._connections_)

    def connection(self, key: typing.Union[enum.Enum, str]) -> typing.Optional["Connection"]:
        """
        Looks up a connection by its key or by its raw name. Keys that are not
        declared by the model are never an error; they just are not present.
        """
        from .converters import coerce_enum

        if isinstance(key, str):
            key_type = self._descriptor_.connection_keys
            if key_type is None:
                return None
            member = coerce_enum(key_type, key)
            if member is None:
                return None
            key = member
        return self._connections_.get(key)

    def is_present(self, name: str) -> bool:
        if name not in self._descriptor_.attributes:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")
        return name in self._values_

    def values(self) -> typing.Mapping[str, typing.Any]:
        """
        Returns the populated attributes. Absent attributes are not included.
        """
        return types.MappingProxyType(self._values_)

    def __getattr__(self, name: str) -> typing.Any:
        descr = getattr(type(self), "_descriptor_", None)
        if descr is not None and name in descr.attributes:
            return self.__dict__.get("_values_", {}).get(name, Absent)
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def __setattr__(self, name: str, value: typing.Any) -> None:
        from .exceptions import ImmutableAttributeError

        raise ImmutableAttributeError(self._descriptor_.name, name)

    def __delattr__(self, name: str) -> None:
        from .exceptions import ImmutableAttributeError

        raise ImmutableAttributeError(self._descriptor_.name, name)

    def __eq__(self, other: typing.Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._values_ == other._values_ and self._connections_ == other._connections_

    __hash__ = None  # type: ignore

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(f'{k}={v!r}' for k, v in self._values_.items())})"

    def __init__(self, **values: typing.Any) -> None:
        descr = self._descriptor_
        for name in values:
            if name not in descr.attributes:
                raise TypeError(f"{type(self).__name__}() got an unexpected attribute {name!r}")
        object.__setattr__(self, "_values_", dict(values))
        object.__setattr__(self, "_connections_", {})


def date_of(
    value: typing.Union[datetime.datetime, None, AbsentType]
) -> typing.Union[datetime.date, None, AbsentType]:
    """
    Projects a timestamp attribute onto its calendar date, passing ``None``
    and :py:data:`Absent` through untouched.
    """
    if isinstance(value, datetime.datetime):
        return value.date()
    return value
