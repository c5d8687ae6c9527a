import abc
import typing

from .types import JSONValue
from .utils import JSONPointer, english_enumerate


class VimeoSerdeException(Exception, metaclass=abc.ABCMeta):
    pass


class InvalidDeclarationError(VimeoSerdeException):
    message: str

    def __str__(self):
        return self.message

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ImmutableAttributeError(VimeoSerdeException, AttributeError):
    model_name: str
    name: str

    @property
    def message(self) -> str:
        return f'attribute ({self.name}) of "{self.model_name}" is read-only'

    def __str__(self):
        return self.message

    def __init__(self, model_name: str, name: str):
        super().__init__(model_name, name)
        self.model_name = model_name
        self.name = name


class FieldError(VimeoSerdeException, metaclass=abc.ABCMeta):
    """
    The base for the individual problems collected while decoding a payload.
    """

    model_name: str
    name: str
    pointer: JSONPointer

    @property
    @abc.abstractmethod
    def message(self) -> str:
        ...  # pragma: nocover

    def __str__(self):
        return f"{self.pointer}: {self.message}"

    def __init__(self, model_name: str, name: str, pointer: JSONPointer):
        super().__init__(model_name, name, pointer)
        self.model_name = model_name
        self.name = name
        self.pointer = pointer


class MissingRequiredFieldError(FieldError):
    @property
    def message(self) -> str:
        return f'attribute ({self.name}) required by "{self.model_name}" is not supplied'


class InvalidFieldValueError(FieldError):
    actual: JSONValue
    detail: typing.Optional[str]

    @property
    def message(self) -> str:
        return f'attribute ({self.name}) in "{self.model_name}" contains an invalid value{" (" + self.detail + ")" if self.detail is not None else ""}: {self.actual!r}'

    def __init__(
        self,
        model_name: str,
        name: str,
        pointer: JSONPointer,
        actual: JSONValue,
        detail: typing.Optional[str] = None,
    ):
        super().__init__(model_name, name, pointer)
        self.actual = actual
        self.detail = detail


class DecodeError(VimeoSerdeException):
    payload: JSONValue
    errors: typing.Sequence[FieldError]

    @property
    def message(self) -> str:
        return f"failed to decode payload: {english_enumerate(str(e) for e in self.errors)}"

    @property
    def missing_fields(self) -> typing.Sequence[str]:
        return [e.name for e in self.errors if isinstance(e, MissingRequiredFieldError)]

    def __str__(self):
        return self.message

    def __init__(self, payload: JSONValue, errors: typing.Sequence[FieldError]):
        super().__init__(payload, errors)
        self.payload = payload
        self.errors = errors


class TransportError(VimeoSerdeException):
    message: str
    status: typing.Optional[int]
    request: typing.Optional["Request"]

    def __str__(self):
        if self.status is None:
            return self.message
        return f"{self.message} (status {self.status})"

    def __init__(
        self,
        message: str,
        status: typing.Optional[int] = None,
        request: typing.Optional["Request"] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.request = request


if typing.TYPE_CHECKING:
    from .request import Request  # noqa: E402, F401
