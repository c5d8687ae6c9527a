"""
Paginated collections.

A collection endpoint responds with one page of items together with the
pagination metadata::

    {
        "total": 52,
        "page": 1,
        "per_page": 25,
        "paging": {
            "next": "/me/videos?page=2",
            "previous": null,
            "first": "/me/videos?page=1",
            "last": "/me/videos?page=3"
        },
        "data": [...]
    }

:py:func:`decode_page` turns such a payload into a :py:class:`Page`, whose
:py:attr:`Page.next_page_request` is the :py:class:`Request` to submit for the
following page. Nothing in this module performs I/O.
"""

import collections.abc
import dataclasses
import enum
import typing

from .converters import convert
from .exceptions import DecodeError, InvalidFieldValueError
from .mapper import DecodeContext, Mapper, default_mapper
from .models import Model
from .request import Request
from .types import JSONValue
from .utils import JSONPointer

M = typing.TypeVar("M", bound=Model)


class PageState(enum.Enum):
    INITIAL = "initial"
    """The request for the page has not been sent yet"""
    FETCHED = "fetched"
    """The page is decoded and another page follows it"""
    EXHAUSTED = "exhausted"
    """The page is decoded and is the last one"""


@dataclasses.dataclass(frozen=True)
class PagingLinks:
    """
    The ``paging`` section of a collection response.
    """

    next: typing.Optional[str] = None
    previous: typing.Optional[str] = None
    first: typing.Optional[str] = None
    last: typing.Optional[str] = None

    @classmethod
    def from_wire(cls, paging: JSONValue) -> "PagingLinks":
        if not isinstance(paging, collections.abc.Mapping):
            return cls()
        return cls(
            **{
                f.name: paging.get(f.name)
                for f in dataclasses.fields(cls)
                if isinstance(paging.get(f.name), str) and paging.get(f.name)
            }
        )


@dataclasses.dataclass(frozen=True)
class Page(typing.Generic[M]):
    """
    A :py:class:`Page` holds the decoded items of one collection response and
    knows how to ask for its neighbours.
    """

    request: Request
    """
    The request this page was fetched with.
    """

    models: typing.Tuple[M, ...] = ()
    """
    The decoded items, in the order the response lists them.
    """

    total: typing.Optional[int] = None
    page: typing.Optional[int] = None
    per_page: typing.Optional[int] = None
    paging: PagingLinks = dataclasses.field(default_factory=PagingLinks)

    def __iter__(self) -> typing.Iterator[M]:
        return iter(self.models)

    def __len__(self) -> int:
        return len(self.models)

    @property
    def state(self) -> PageState:
        return PageState.FETCHED if self.paging.next is not None else PageState.EXHAUSTED

    def _request_for(self, link: typing.Optional[str]) -> typing.Optional[Request]:
        if link is None:
            return None
        return Request.from_link(
            link,
            self.request.model_type,
            method=self.request.method,
            collection=True,
        )

    @property
    def next_page_request(self) -> typing.Optional[Request]:
        return self._request_for(self.paging.next)

    @property
    def previous_page_request(self) -> typing.Optional[Request]:
        return self._request_for(self.paging.previous)

    @property
    def first_page_request(self) -> typing.Optional[Request]:
        return self._request_for(self.paging.first)

    @property
    def last_page_request(self) -> typing.Optional[Request]:
        return self._request_for(self.paging.last)


def _optional_int(value: JSONValue) -> typing.Optional[int]:
    try:
        return convert(int, value)
    except (ValueError, TypeError):
        return None


def decode_page(
    payload: JSONValue, request: Request, mapper: typing.Optional[Mapper] = None
) -> Page:
    """
    Decodes a collection response.

    :param JSONValue payload: the parsed response body.
    :param Request request: the request the response answers.
    :param Optional[Mapper] mapper: the mapper used for the items.
    :raises DecodeError: if the payload has no ``data`` array or any item fails to decode.
    """
    mapper = mapper or default_mapper
    model_name = request.model_type.descriptor().name
    pointer = JSONPointer()
    ctx = DecodeContext()

    body: typing.Mapping[str, JSONValue] = (
        payload if isinstance(payload, collections.abc.Mapping) else {}
    )
    data = body.get("data")
    if isinstance(data, str) or not isinstance(data, collections.abc.Sequence):
        ctx.error_occurred(
            InvalidFieldValueError(model_name, "data", pointer / "data", data, "an array expected")
        )
        raise DecodeError(payload, ctx.errors)

    models = []
    for i, item in enumerate(data):
        model = mapper.decode_value(ctx, request.model_type, pointer / "data" / i, item)
        if model is not None:
            models.append(model)
    if ctx.errors:
        raise DecodeError(payload, ctx.errors)

    return Page(
        request=request,
        models=tuple(models),
        total=_optional_int(body.get("total")),
        page=_optional_int(body.get("page")),
        per_page=_optional_int(body.get("per_page")),
        paging=PagingLinks.from_wire(body.get("paging")),
    )


def next_page(page: Page) -> typing.Optional[Request]:
    """
    Returns the request for the page following ``page``, or None if ``page`` is the last one.
    """
    return page.next_page_request
