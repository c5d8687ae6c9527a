import collections.abc
import dataclasses
import enum
import typing

from .converters import is_supported_type
from .deferred import Deferred
from .exceptions import InvalidDeclarationError
from .models import AttributeDescriptor, ClassRef, Model, ModelDescriptor


class UnspecifiedType:
    _singleton: typing.ClassVar[typing.Optional["UnspecifiedType"]] = None

    def __bool__(self):
        return False

    def __new__(cls) -> "UnspecifiedType":
        if cls._singleton is None:
            cls._singleton = object.__new__(cls)
        return cls._singleton


UNSPECIFIED = UnspecifiedType()


@dataclasses.dataclass
class Attr:
    type: typing.Any = typing.Any
    required: bool = False
    name: typing.Union[UnspecifiedType, str] = UNSPECIFIED


@dataclasses.dataclass
class Meta:
    attributes: typing.Sequence[Attr] = ()
    members_by_encoding_keys: typing.Mapping[str, str] = dataclasses.field(default_factory=dict)
    classes_by_encoding_keys: typing.Mapping[str, ClassRef] = dataclasses.field(
        default_factory=dict
    )
    connection_keys: typing.Optional[typing.Type[enum.Enum]] = None
    connection_classes: typing.Mapping[enum.Enum, typing.Type] = dataclasses.field(
        default_factory=dict
    )
    metadata_key: str = "metadata"


META_KEYS = frozenset(f.name for f in dataclasses.fields(Meta))


def handle_meta(meta: typing.Optional[typing.Type]) -> Meta:
    if meta is None:
        return Meta()

    attrs = {k: v for k, v in vars(meta).items() if not k.startswith("__")}
    unknown = set(attrs) - META_KEYS
    if unknown:
        raise InvalidDeclarationError(f"unknown Meta options: {', '.join(sorted(unknown))}")

    attributes: typing.Sequence[Attr] = ()

    if "attributes" in attrs:
        _attributes = typing.cast(
            typing.Union[
                typing.Sequence[Attr],
                typing.Mapping[str, Attr],
            ],
            attrs["attributes"],
        )
        if isinstance(_attributes, collections.abc.Mapping):
            for name, attr in _attributes.items():
                if not isinstance(attr, Attr):
                    raise InvalidDeclarationError(f"{name}: {attr!r} is not an Attr")
            attributes = [
                dataclasses.replace(attr, name=name) for name, attr in _attributes.items()
            ]
        elif isinstance(_attributes, collections.abc.Sequence) and not isinstance(
            _attributes, str
        ):
            attributes = _attributes
        else:
            raise InvalidDeclarationError(
                f"attributes must be a mapping or a sequence of Attr, got {_attributes!r}"
            )
    return Meta(
        attributes=attributes,
        members_by_encoding_keys=attrs.get("members_by_encoding_keys", {}),
        classes_by_encoding_keys=attrs.get("classes_by_encoding_keys", {}),
        connection_keys=attrs.get("connection_keys"),
        connection_classes=attrs.get("connection_classes", {}),
        metadata_key=attrs.get("metadata_key", "metadata"),
    )


def build_attribute_descriptors(
    class_: typing.Type[Model], meta: Meta
) -> typing.Sequence[AttributeDescriptor]:
    model_name = class_.__name__
    result: typing.List[AttributeDescriptor] = []
    nested_names = {
        meta.members_by_encoding_keys.get(k, k) for k in meta.classes_by_encoding_keys.keys()
    }
    for attr in meta.attributes:
        if not isinstance(attr, Attr):
            raise InvalidDeclarationError(f"{attr!r} in {model_name}.Meta is not an Attr")
        if attr.name is UNSPECIFIED:
            raise InvalidDeclarationError(f"an attribute of {model_name} has no name")
        name = typing.cast(str, attr.name)
        if name.startswith("_") or hasattr(class_, name):
            raise InvalidDeclarationError(f'attribute name "{name}" of {model_name} is reserved')
        if name in nested_names:
            if attr.type is not typing.Any:
                raise InvalidDeclarationError(
                    f'attribute "{name}" of {model_name} decodes into a nested model; '
                    "its type is given by classes_by_encoding_keys"
                )
        elif not is_supported_type(attr.type):
            raise InvalidDeclarationError(
                f'attribute "{name}" of {model_name} has an unsupported type {attr.type!r}'
            )
        result.append(AttributeDescriptor(type=attr.type, name=name, required=attr.required))
    return result


def validate_tables(model_name: str, meta: Meta, names: typing.AbstractSet[str]) -> None:
    from .connections import Connection

    for key, name in meta.members_by_encoding_keys.items():
        if name not in names:
            raise InvalidDeclarationError(
                f'key "{key}" of {model_name} is mapped to an undeclared attribute "{name}"'
            )

    for key, ref in meta.classes_by_encoding_keys.items():
        if meta.members_by_encoding_keys.get(key, key) not in names:
            raise InvalidDeclarationError(
                f'key "{key}" of {model_name} has a class but no attribute to hold it'
            )
        if isinstance(ref, Deferred):
            continue
        if not isinstance(ref, type) or not issubclass(ref, Model):
            raise InvalidDeclarationError(
                f'class declared for key "{key}" of {model_name} is not a model: {ref!r}'
            )

    if meta.connection_keys is None:
        if meta.connection_classes:
            raise InvalidDeclarationError(
                f"{model_name} declares connection_classes without connection_keys"
            )
        return

    if not isinstance(meta.connection_keys, type) or not issubclass(
        meta.connection_keys, enum.Enum
    ):
        raise InvalidDeclarationError(f"connection_keys of {model_name} must be an Enum")
    for key, class_ in meta.connection_classes.items():
        if not isinstance(key, meta.connection_keys):
            raise InvalidDeclarationError(
                f"{key!r} in connection_classes of {model_name} is not one of its connection keys"
            )
        if not isinstance(class_, type) or not issubclass(class_, Connection):
            raise InvalidDeclarationError(
                f"connection class for {key!r} of {model_name} is not a Connection: {class_!r}"
            )


def build_descriptor(class_: typing.Type[Model]) -> ModelDescriptor:
    """
    Builds the :py:class:`ModelDescriptor` of a model class from its inner ``Meta``.
    A subclass that declares no ``Meta`` of its own shares its parent's.
    """
    name = class_.__name__
    meta = handle_meta(getattr(class_, "Meta", None))
    attributes = build_attribute_descriptors(class_, meta)
    validate_tables(name, meta, {a.name for a in attributes})
    return ModelDescriptor(
        name=name,
        attributes=attributes,
        members_by_encoding_keys=meta.members_by_encoding_keys,
        classes_by_encoding_keys=meta.classes_by_encoding_keys,
        connection_keys=meta.connection_keys,
        connection_classes=meta.connection_classes,
        metadata_key=meta.metadata_key,
    )
