from bitbucket_server_client.api.build_status_get import BuildStatusGet, BuildStatusGetBuilder
from bitbucket_server_client.api.build_status_post import BuildStatusPost, BuildStatusPostBuilder
from bitbucket_server_client.api.pull_request_changes_get import (
    PullRequestChangesGet,
    PullRequestChangesGetBuilder,
)
from bitbucket_server_client.api.pull_request_post import PullRequestPost, PullRequestPostBuilder
from bitbucket_server_client.api.request import ApiRequest, RequestBuilder
from bitbucket_server_client.errors import RequestConstructionError
from bitbucket_server_client.models import BuildStatusPostPayload, PullRequestPostPayload
from bitbucket_server_client.services.bitbucket_client import BitbucketClient


def _require(**values: object) -> None:
    for name, value in values.items():
        if value is None or value == "":
            raise RequestConstructionError(f"`{name}` must not be empty")


class Api:
    """Endpoints under ``/rest/api/latest``.

    Each method takes the identifiers of the resource and returns a builder
    with them already set; finish it with ``build()`` and ``await .send()``::

        status = await (
            client.api()
            .build_status_get("PROJECT", "my-repo", "0a1b2c3d")
            .key("ci")
            .build()
            .send()
        )
    """

    def __init__(self, client: BitbucketClient):
        self.client = client

    def build_status_get(
        self, project_key: str, repository_slug: str, commit_id: str
    ) -> BuildStatusGetBuilder:
        _require(project_key=project_key, repository_slug=repository_slug, commit_id=commit_id)
        return (
            BuildStatusGetBuilder(self.client)
            .project_key(project_key)
            .repository_slug(repository_slug)
            .commit_id(commit_id)
        )

    def build_status_post(
        self,
        project_key: str,
        repository_slug: str,
        commit_id: str,
        build_status: BuildStatusPostPayload,
    ) -> BuildStatusPostBuilder:
        _require(project_key=project_key, repository_slug=repository_slug, commit_id=commit_id)
        return (
            BuildStatusPostBuilder(self.client)
            .project_key(project_key)
            .repository_slug(repository_slug)
            .commit_id(commit_id)
            .build_status(build_status)
        )

    def pull_request_changes_get(
        self, project_key: str, repository_slug: str, pull_request_id: int | str
    ) -> PullRequestChangesGetBuilder:
        _require(
            project_key=project_key,
            repository_slug=repository_slug,
            pull_request_id=pull_request_id,
        )
        return (
            PullRequestChangesGetBuilder(self.client)
            .project_key(project_key)
            .repository_slug(repository_slug)
            .pull_request_id(pull_request_id)
        )

    def pull_request_post(
        self,
        project_key: str,
        repository_slug: str,
        pull_request: PullRequestPostPayload,
    ) -> PullRequestPostBuilder:
        _require(project_key=project_key, repository_slug=repository_slug)
        return (
            PullRequestPostBuilder(self.client)
            .project_key(project_key)
            .repository_slug(repository_slug)
            .pull_request(pull_request)
        )


__all__ = [
    "Api",
    "ApiRequest",
    "BuildStatusGet",
    "BuildStatusGetBuilder",
    "BuildStatusPost",
    "BuildStatusPostBuilder",
    "PullRequestChangesGet",
    "PullRequestChangesGetBuilder",
    "PullRequestPost",
    "PullRequestPostBuilder",
    "RequestBuilder",
]
