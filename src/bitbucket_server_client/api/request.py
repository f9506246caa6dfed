import logging
from typing import Any, ClassVar, Generic, Self, TypeVar
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, PrivateAttr, ValidationError

from bitbucket_server_client.errors import RequestConstructionError
from bitbucket_server_client.services.bitbucket_client import BitbucketClient

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def path_segment(value: str) -> str:
    return quote(str(value), safe="")


class ApiRequest(BaseModel, Generic[T]):
    """A finalized, immutable request for one endpoint.

    Instances come out of a builder's ``build()`` and are sent once with
    :meth:`send`. Subclasses declare the identifying fields, the ``path``
    template and the model the response body is parsed into.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    method: ClassVar[str] = "GET"
    output: ClassVar[type[BaseModel] | None] = None

    client: BitbucketClient

    _sent: bool = PrivateAttr(default=False)

    @property
    def path(self) -> str:
        raise NotImplementedError

    @property
    def params(self) -> dict[str, str]:
        return {}

    @property
    def body(self) -> str | None:
        return None

    @property
    def url(self) -> str:
        return self.client.url(self.path)

    @property
    def headers(self) -> dict[str, str]:
        return self.client.headers()

    async def send(self) -> T | None:
        if self._sent:
            raise RequestConstructionError(f"{type(self).__name__} was already sent")
        self._sent = True
        return await self.client.execute(
            self.method,
            self.path,
            params=self.params or None,
            body=self.body,
            output=self.output,
        )


R = TypeVar("R", bound=ApiRequest)


class RequestBuilder(Generic[R]):
    """Accumulates fields for an :class:`ApiRequest` until ``build()``.

    ``required`` fields must be set to a non-empty value. Optional fields left
    unset (or set back to ``None``) fall back to the request's defaults.
    """

    request_type: ClassVar[type[ApiRequest]]
    required: ClassVar[tuple[str, ...]] = ()

    def __init__(self, client: BitbucketClient | None = None):
        self._fields: dict[str, Any] = {"client": client}

    def _set(self, name: str, value: Any) -> Self:
        self._fields[name] = value
        return self

    def client(self, client: BitbucketClient) -> Self:
        return self._set("client", client)

    def build(self) -> R:
        for name in ("client", *self.required):
            value = self._fields.get(name)
            if value is None or value == "":
                raise RequestConstructionError(f"`{name}` must be initialized")

        fields = {name: value for name, value in self._fields.items() if value is not None}
        try:
            request = self.request_type(**fields)
        except ValidationError as e:
            raise RequestConstructionError(str(e)) from e
        logger.debug("Built %s %s", request.method, request.path)
        return request
