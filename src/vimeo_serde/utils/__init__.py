import typing

from .formatting import english_enumerate  # noqa
from .jsonpointer import JSONPointer  # noqa

T = typing.TypeVar("T")


class AbsentType:
    """
    The type of :py:data:`Absent`, which denotes an attribute whose wire key
    was not present in the decoded payload.
    """

    _singleton: typing.ClassVar[typing.Optional["AbsentType"]] = None

    def __bool__(self):
        return False

    def __repr__(self) -> str:
        return "Absent"

    def __reduce__(self):
        return "Absent"

    def __new__(cls) -> "AbsentType":
        if cls._singleton is None:
            cls._singleton = object.__new__(cls)
        return cls._singleton


Absent = AbsentType()


def assert_not_none(value: typing.Optional[T]) -> T:
    assert value is not None
    return value
