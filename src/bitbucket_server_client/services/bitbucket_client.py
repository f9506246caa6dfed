import logging
from typing import TYPE_CHECKING, Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from bitbucket_server_client.errors import (
    DeserializationError,
    HttpClientError,
    HttpServerError,
    RequestConstructionError,
    TransportError,
    UnauthorizedError,
    UnexpectedResponseError,
)

if TYPE_CHECKING:
    from bitbucket_server_client.api import Api

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class BitbucketClient:
    """Connection settings for one Bitbucket Data Center instance.

    ``base_url`` points at the REST root and should end with ``/rest``, e.g.
    ``https://bitbucket.example.com/rest``. Every request carries the token as
    a bearer credential.

    The client keeps no per-request state, so one instance can be shared by
    concurrent tasks. The transport can be replaced with
    :meth:`with_http_client` (timeouts, proxies, TLS); do that before the first
    request is sent, swapping it while requests are in flight is not supported.
    """

    def __init__(
        self, base_url: str, token: str, http_client: httpx.AsyncClient | None = None
    ):
        if not base_url:
            raise RequestConstructionError("base_url must not be empty")
        if not token:
            raise RequestConstructionError("token must not be empty")
        if not token.isascii():
            raise RequestConstructionError("token must be ASCII to fit in an HTTP header")
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.http_client = http_client or httpx.AsyncClient()

    def __repr__(self):
        # never show the token
        return f"BitbucketClient(base_url={self.base_url!r})"

    def api(self) -> "Api":
        """Access the endpoints under ``/rest/api``."""
        from bitbucket_server_client.api import Api

        return Api(self)

    def with_http_client(self, http_client: httpx.AsyncClient) -> "BitbucketClient":
        self.http_client = http_client
        return self

    async def aclose(self) -> None:
        await self.http_client.aclose()

    async def __aenter__(self) -> "BitbucketClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }

    async def execute(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        body: str | None = None,
        output: type[T] | None = None,
    ) -> T | None:
        url = self.url(path)
        logger.debug("%s %s params=%s", method, url, params)
        try:
            response = await self.http_client.request(
                method, url, params=params, content=body, headers=self.headers()
            )
        except httpx.HTTPError as e:
            logger.debug("Error sending request: %r", e)
            raise TransportError(str(e) or type(e).__name__) from e

        logger.debug("%s %s -> %s", method, url, response.status_code)
        return self.process_response(response, output)

    @staticmethod
    def process_response(response: httpx.Response, output: type[T] | None) -> T | None:
        status = response.status_code
        if response.is_success:
            return BitbucketClient.make_api_response(response.text, output)
        if status in (401, 403):
            raise UnauthorizedError(status)
        if response.is_client_error:
            raise HttpClientError(status, response.text)
        if response.is_server_error:
            raise HttpServerError(status, response.text)
        raise UnexpectedResponseError(status, response.text)

    @staticmethod
    def make_api_response(text: str, output: type[T] | None) -> T | None:
        # an empty body is a successful response without content
        if not text.strip() or output is None:
            return None
        try:
            return output.model_validate_json(text)
        except ValidationError as e:
            logger.debug("Error deserializing %s: %s", output.__name__, e)
            raise DeserializationError(str(e)) from e


def new(base_url: str, token: str) -> BitbucketClient:
    """Create a client with a default ``httpx.AsyncClient`` transport."""
    return BitbucketClient(base_url, token)
