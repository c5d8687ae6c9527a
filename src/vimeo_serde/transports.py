import logging
import typing

import requests

from .config import ACCEPT_TEMPLATE, DEFAULT_API_VERSION, Settings
from .exceptions import TransportError
from .request import Request
from .types import JSONValue

logger = logging.getLogger(__name__)


class Transport(typing.Protocol):
    def execute(self, request: Request) -> JSONValue:
        """
        Executes ``request`` and returns the parsed response body.

        :raises TransportError: if the request could not be completed.
        """
        ...  # pragma: nocover


class RequestsTransport:
    """
    A :py:class:`Transport` on top of :py:class:`requests.Session`.

    :param str base_url: the URL relative request paths are resolved against.
    :param Optional[str] access_token: sent as a bearer token when given.
    :param Optional[str] accept: the value of the ``Accept`` header.
    :param float timeout: the timeout of each request in seconds.
    :param Optional[requests.Session] session: the HTTP session to use.
    """

    base_url: str
    timeout: float
    headers: typing.Dict[str, str]
    session: requests.Session

    def url_for(self, request: Request) -> str:
        if "://" in request.path:
            return request.path
        return f"{self.base_url.rstrip('/')}/{request.path.lstrip('/')}"

    def execute(self, request: Request) -> JSONValue:
        url = self.url_for(request)
        logger.debug("%s %s %r", request.method, url, dict(request.parameters))
        try:
            response = self.session.request(
                request.method,
                url,
                params=dict(request.parameters),
                headers=self.headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"{request.method} {url} failed: {e}", request=request) from e

        if not response.ok:
            raise TransportError(
                f"{request.method} {url} failed: {response.reason}",
                status=response.status_code,
                request=request,
            )
        if response.status_code == 204 or not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"{request.method} {url} responded with a non-JSON body",
                status=response.status_code,
                request=request,
            ) from e

    @classmethod
    def from_settings(
        cls, settings: Settings, session: typing.Optional[requests.Session] = None
    ) -> "RequestsTransport":
        return cls(
            base_url=settings.api_base_url,
            access_token=settings.access_token,
            accept=settings.accept,
            timeout=settings.timeout,
            session=session,
        )

    def __init__(
        self,
        base_url: str = "https://api.vimeo.com",
        access_token: typing.Optional[str] = None,
        accept: typing.Optional[str] = None,
        timeout: float = 30.0,
        session: typing.Optional[requests.Session] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.headers = {"Accept": accept or ACCEPT_TEMPLATE.format(version=DEFAULT_API_VERSION)}
        if access_token is not None:
            self.headers["Authorization"] = f"Bearer {access_token}"
        self.session = session if session is not None else requests.Session()
