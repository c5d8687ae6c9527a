import dataclasses
import types
import typing
import urllib.parse

if typing.TYPE_CHECKING:
    from .models import Model  # noqa: F401


@dataclasses.dataclass(frozen=True)
class Request:
    """
    A :py:class:`Request` is the logical description of an API call: the path, the
    query parameters, and the model type the response decodes into. Turning it
    into an actual HTTP request is up to a :py:class:`~vimeo_serde.transports.Transport`.
    """

    path: str
    """
    The path of the resource, or an absolute URL.
    """

    model_type: typing.Type["Model"]
    """
    The model the response (or every item of a collection response) decodes into.
    """

    parameters: typing.Mapping[str, typing.Any] = dataclasses.field(
        default_factory=lambda: types.MappingProxyType({}), hash=False
    )
    method: str = "GET"
    collection: bool = False
    """
    True if the response is a page of a collection rather than a single resource.
    """

    def __post_init__(self):
        object.__setattr__(self, "parameters", types.MappingProxyType(dict(self.parameters)))
        object.__setattr__(self, "method", self.method.upper())

    def with_parameters(self, **parameters: typing.Any) -> "Request":
        """
        Returns a copy of the request with ``parameters`` merged into its own.
        """
        if not parameters:
            return self
        merged = dict(self.parameters)
        merged.update(parameters)
        return dataclasses.replace(self, parameters=merged)

    @classmethod
    def from_link(
        cls,
        link: str,
        model_type: typing.Type["Model"],
        method: str = "GET",
        collection: bool = False,
    ) -> "Request":
        """
        Builds a request out of a link found in a response, splitting its query
        string into :py:attr:`parameters`. A repeated query parameter becomes a
        list of its values, in order.
        """
        parts = urllib.parse.urlsplit(link)
        path = urllib.parse.urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))
        parameters: typing.Dict[str, typing.Any] = {}
        for k, v in urllib.parse.parse_qsl(parts.query, keep_blank_values=True):
            if k not in parameters:
                parameters[k] = v
            elif isinstance(parameters[k], list):
                parameters[k].append(v)
            else:
                parameters[k] = [parameters[k], v]
        return cls(
            path=path,
            model_type=model_type,
            parameters=parameters,
            method=method,
            collection=collection,
        )
