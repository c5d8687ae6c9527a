import typing


def _escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def _unescape(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


class JSONPointer:
    """
    An immutable `RFC 6901 <https://tools.ietf.org/html/rfc6901>`_ JSON pointer,
    used to tell where in a payload a decoding problem was found.

    Pointers are composed with the ``/`` operator::

        JSONPointer() / "user" / "pictures" / 0  # => /user/pictures/0
    """

    tokens: typing.Tuple[str, ...]

    def __truediv__(self, token: typing.Union[str, int]) -> "JSONPointer":
        return JSONPointer.from_tokens(self.tokens + (str(token),))

    def __str__(self) -> str:
        if not self.tokens:
            return "/"
        return "".join("/" + _escape(t) for t in self.tokens)

    def __repr__(self) -> str:
        return f"JSONPointer({str(self)!r})"

    def __eq__(self, other: typing.Any) -> bool:
        if not isinstance(other, JSONPointer):
            return NotImplemented
        return self.tokens == other.tokens

    def __hash__(self) -> int:
        return hash(self.tokens)

    @classmethod
    def from_tokens(cls, tokens: typing.Iterable[str]) -> "JSONPointer":
        pointer = object.__new__(cls)
        pointer.tokens = tuple(tokens)
        return pointer

    def __init__(self, repr_: str = "/"):
        if repr_ in ("", "/"):
            self.tokens = ()
            return
        if not repr_.startswith("/"):
            raise ValueError(f"invalid JSON pointer: {repr_!r}")
        self.tokens = tuple(_unescape(t) for t in repr_[1:].split("/"))
