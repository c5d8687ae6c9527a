import collections.abc
import logging
import typing

from .connections import ConnectionsParser
from .converters import convert
from .exceptions import (
    DecodeError,
    FieldError,
    InvalidFieldValueError,
    MissingRequiredFieldError,
)
from .models import AttributeDescriptor, Model, ModelDescriptor
from .types import JSONValue
from .utils import Absent, JSONPointer

logger = logging.getLogger(__name__)

M = typing.TypeVar("M", bound=Model)


class DecodeContext:
    """
    A :py:class:`DecodeContext` collects the problems found while decoding, so
    that a single :py:class:`DecodeError` can report all of them.
    """

    errors: typing.List[FieldError]

    def error_occurred(self, error: FieldError) -> None:
        self.errors.append(error)

    def __init__(self):
        self.errors = []


class Mapper:
    """
    A :py:class:`Mapper` populates models out of generic JSON-level payloads
    according to the tables each model type declares.
    """

    def _decode_nested(
        self,
        ctx: DecodeContext,
        descr: ModelDescriptor,
        attr: AttributeDescriptor,
        class_: typing.Type[Model],
        pointer: JSONPointer,
        value: JSONValue,
    ) -> typing.Any:
        if value is None:
            return None

        nested_ctx = DecodeContext()
        result: typing.Any
        if isinstance(value, collections.abc.Mapping):
            result = self.decode_value(nested_ctx, class_, pointer, value)
        elif isinstance(value, collections.abc.Sequence) and not isinstance(value, str):
            result = [
                self.decode_value(nested_ctx, class_, pointer / i, v) for i, v in enumerate(value)
            ]
        else:
            nested_ctx.error_occurred(
                InvalidFieldValueError(
                    descr.name,
                    attr.name,
                    pointer,
                    value,
                    f"an object or an array of {class_.descriptor().name} expected",
                )
            )

        if nested_ctx.errors:
            if attr.required:
                ctx.errors.extend(nested_ctx.errors)
            else:
                logger.debug(
                    "%s.%s left absent as the nested %s at %s failed to decode",
                    descr.name,
                    attr.name,
                    class_.descriptor().name,
                    pointer,
                )
            return Absent
        return result

    def _build_connections(
        self, descr: ModelDescriptor, pointer: JSONPointer, payload: typing.Mapping[str, JSONValue]
    ) -> typing.Dict:
        if descr.connection_keys is None:
            return {}
        return ConnectionsParser(descr.connection_keys, descr.connection_classes)(
            payload.get(descr.metadata_key), pointer / descr.metadata_key
        )

    def decode_value(
        self,
        ctx: DecodeContext,
        model_type: typing.Type[M],
        pointer: JSONPointer,
        payload: JSONValue,
    ) -> typing.Optional[M]:
        """
        Decodes ``payload`` into ``model_type``, reporting problems to ``ctx``.

        :return: the model, or None if any error was reported.
        """
        descr = model_type.descriptor()
        if not isinstance(payload, collections.abc.Mapping):
            ctx.error_occurred(
                InvalidFieldValueError(descr.name, "", pointer, payload, "an object expected")
            )
            return None

        num_errors = len(ctx.errors)
        values: typing.Dict[str, typing.Any] = {}
        supplied: typing.Set[str] = set()

        for key, value in payload.items():
            attr = descr.attribute_for_key(key)
            if attr is None:
                if key != descr.metadata_key:
                    logger.debug("ignoring key %r unknown to %s", key, descr.name)
                continue
            supplied.add(attr.name)
            p = pointer / key
            class_ = descr.class_for_key(key)
            if class_ is not None:
                v = self._decode_nested(ctx, descr, attr, class_, p, value)
            else:
                try:
                    v = convert(attr.type, value)
                except (ValueError, TypeError) as e:
                    if attr.required:
                        ctx.error_occurred(
                            InvalidFieldValueError(descr.name, attr.name, p, value, str(e))
                        )
                    else:
                        logger.debug("%s.%s left absent: %s", descr.name, attr.name, e)
                    continue
            if v is not Absent:
                values[attr.name] = v

        for attr in descr.attributes.values():
            if attr.required and attr.name not in supplied:
                ctx.error_occurred(
                    MissingRequiredFieldError(
                        descr.name, attr.name, pointer / descr.encoding_key_for(attr.name)
                    )
                )

        if len(ctx.errors) > num_errors:
            return None
        return model_type._from_mapping_(
            values, self._build_connections(descr, pointer, payload)
        )

    def decode(self, payload: JSONValue, model_type: typing.Type[M]) -> M:
        """
        Decodes ``payload`` into an instance of ``model_type``.

        :param JSONValue payload: an already-parsed payload.
        :param Type[Model] model_type: the model type.
        :return: the decoded model.
        :raises DecodeError: if a required attribute is missing or malformed.
        """
        ctx = DecodeContext()
        result = self.decode_value(ctx, model_type, JSONPointer(), payload)
        if ctx.errors:
            raise DecodeError(payload, ctx.errors)
        assert result is not None
        return result


default_mapper = Mapper()


def decode(
    payload: JSONValue, model_type: typing.Type[M], mapper: typing.Optional[Mapper] = None
) -> M:
    """
    Decodes ``payload`` into an instance of ``model_type``.

    :raises DecodeError: if a required attribute is missing or malformed.
    """
    return (mapper or default_mapper).decode(payload, model_type)
