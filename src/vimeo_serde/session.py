import dataclasses
import logging
import typing

from .config import Settings
from .exceptions import DecodeError, TransportError, VimeoSerdeException
from .mapper import Mapper, default_mapper
from .models import Model
from .pagination import Page, PageState, decode_page
from .request import Request
from .transports import Transport

logger = logging.getLogger(__name__)

T = typing.TypeVar("T")
M = typing.TypeVar("M", bound=Model)


@dataclasses.dataclass(frozen=True)
class Result(typing.Generic[T]):
    """
    The outcome of a single request: either a value (a model, or a :py:class:`Page`
    for collection requests) or the error that prevented it.
    """

    request: Request
    value: typing.Optional[T] = None
    error: typing.Optional[VimeoSerdeException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return typing.cast(T, self.value)


@dataclasses.dataclass
class PartialCollection(typing.Generic[M]):
    """
    The items gathered while walking a paginated collection. If a page failed,
    :py:attr:`error` tells why and :py:attr:`models` still holds everything the
    pages before it yielded.
    """

    request: Request
    pages: typing.List[Page] = dataclasses.field(default_factory=list)
    error: typing.Optional[VimeoSerdeException] = None

    @property
    def models(self) -> typing.Tuple[M, ...]:
        return tuple(m for page in self.pages for m in page.models)

    @property
    def complete(self) -> bool:
        return self.error is None

    @property
    def state(self) -> PageState:
        if not self.pages:
            return PageState.INITIAL
        return self.pages[-1].state


class Session:
    """
    A :py:class:`Session` binds a transport, the settings, and a mapper together.
    Independent sessions share nothing, so any number of them can coexist.

    :param Transport transport: the transport requests are executed with.
    :param Optional[Settings] settings: the settings; read from the environment if omitted.
    :param Optional[Mapper] mapper: the mapper responses are decoded with.
    """

    transport: Transport
    settings: Settings
    mapper: Mapper

    def prepare(self, request: Request) -> Request:
        if (
            request.collection
            and self.settings.per_page is not None
            and "per_page" not in request.parameters
        ):
            return request.with_parameters(per_page=self.settings.per_page)
        return request

    def request(self, request: Request) -> Result:
        """
        Executes ``request`` and decodes the response. Errors are never raised;
        they are returned in :py:attr:`Result.error`.
        """
        request = self.prepare(request)
        try:
            payload = self.transport.execute(request)
        except TransportError as e:
            logger.warning("request to %s failed: %s", request.path, e)
            return Result(request=request, error=e)

        try:
            value: typing.Any
            if request.collection:
                value = decode_page(payload, request, self.mapper)
            else:
                value = self.mapper.decode(payload, request.model_type)
        except DecodeError as e:
            logger.warning("response from %s failed to decode: %s", request.path, e)
            return Result(request=request, error=e)
        return Result(request=request, value=value)

    def iter_pages(
        self, request: Request, max_pages: typing.Optional[int] = None
    ) -> typing.Iterator[Result[Page]]:
        """
        Walks a paginated collection, yielding the result of every page in order.
        The walk ends after the last page, after the first failed page, or after
        ``max_pages`` pages.
        """
        if not request.collection:
            raise ValueError(f"{request.path} is not a collection request")

        next_request: typing.Optional[Request] = request
        num_pages = 0
        while next_request is not None:
            if max_pages is not None and num_pages >= max_pages:
                break
            result = self.request(next_request)
            num_pages += 1
            yield result
            if not result.ok:
                return
            page = typing.cast(Page, result.value)
            logger.info(
                "fetched page %s of %s (%d items)", page.page, request.path, len(page.models)
            )
            next_request = page.next_page_request

    def collect(
        self, request: Request, max_pages: typing.Optional[int] = None
    ) -> PartialCollection:
        """
        Walks a paginated collection and gathers the items of every page.
        """
        collection: PartialCollection = PartialCollection(request=request)
        for result in self.iter_pages(request, max_pages):
            if not result.ok:
                collection.error = result.error
                break
            collection.pages.append(typing.cast(Page, result.value))
        return collection

    def __init__(
        self,
        transport: Transport,
        settings: typing.Optional[Settings] = None,
        mapper: typing.Optional[Mapper] = None,
    ):
        self.transport = transport
        self.settings = settings if settings is not None else Settings()
        self.mapper = mapper if mapper is not None else default_mapper
