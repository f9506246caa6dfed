"""Typed async client for a subset of the Bitbucket Data Center REST API.

Example::

    from bitbucket_server_client import new

    client = new("https://bitbucket.example.com/rest", "API_TOKEN")
    changes = await (
        client.api()
        .pull_request_changes_get("PROJECT", "my-repo", 42)
        .limit(50)
        .build()
        .send()
    )
"""

from bitbucket_server_client.api import Api
from bitbucket_server_client.errors import (
    ApiError,
    ApiErrorKind,
    DeserializationError,
    HttpClientError,
    HttpServerError,
    RequestConstructionError,
    TransportError,
    UnauthorizedError,
    UnexpectedResponseError,
)
from bitbucket_server_client.services.bitbucket_client import BitbucketClient, new

__all__ = [
    "Api",
    "ApiError",
    "ApiErrorKind",
    "BitbucketClient",
    "DeserializationError",
    "HttpClientError",
    "HttpServerError",
    "RequestConstructionError",
    "TransportError",
    "UnauthorizedError",
    "UnexpectedResponseError",
    "new",
]
