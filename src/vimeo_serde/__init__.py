from .connections import Connection, ConnectionsParser, build_connections  # noqa
from .declarative import Attr  # noqa
from .deferred import Deferred  # noqa
from .exceptions import (  # noqa
    DecodeError,
    ImmutableAttributeError,
    InvalidDeclarationError,
    InvalidFieldValueError,
    MissingRequiredFieldError,
    TransportError,
    VimeoSerdeException,
)
from .mapper import Mapper, decode  # noqa
from .models import Model  # noqa
from .pagination import Page, PageState, PagingLinks, decode_page, next_page  # noqa
from .request import Request  # noqa
from .session import PartialCollection, Result, Session  # noqa
from .utils import Absent  # noqa
