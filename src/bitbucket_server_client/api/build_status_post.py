"""POST a build status for a commit. The server answers 204 without a body."""

from typing import Self

from pydantic import BaseModel

from bitbucket_server_client.api.request import ApiRequest, RequestBuilder, path_segment
from bitbucket_server_client.models import BuildStatusPostPayload


class BuildStatusPost(ApiRequest[BaseModel]):
    method = "POST"

    project_key: str
    repository_slug: str
    commit_id: str
    build_status: BuildStatusPostPayload

    @property
    def path(self) -> str:
        return "api/latest/projects/{}/repos/{}/commits/{}/builds".format(
            path_segment(self.project_key),
            path_segment(self.repository_slug),
            path_segment(self.commit_id),
        )

    @property
    def body(self) -> str:
        return self.build_status.to_json()


class BuildStatusPostBuilder(RequestBuilder[BuildStatusPost]):
    request_type = BuildStatusPost
    required = ("project_key", "repository_slug", "commit_id", "build_status")

    def project_key(self, value: str) -> Self:
        return self._set("project_key", value)

    def repository_slug(self, value: str) -> Self:
        return self._set("repository_slug", value)

    def commit_id(self, value: str) -> Self:
        return self._set("commit_id", value)

    def build_status(self, value: BuildStatusPostPayload) -> Self:
        return self._set("build_status", value)
