"""GET the build status of a commit.

See https://developer.atlassian.com/server/bitbucket/rest/v811/api-group-builds-and-deployments/
"""

from typing import Self

from bitbucket_server_client.api.request import ApiRequest, RequestBuilder, path_segment
from bitbucket_server_client.models import BuildStatus


class BuildStatusGet(ApiRequest[BuildStatus]):
    output = BuildStatus

    project_key: str
    repository_slug: str
    commit_id: str
    # only the status reported under this key
    key: str | None = None

    @property
    def path(self) -> str:
        return "api/latest/projects/{}/repos/{}/commits/{}/builds".format(
            path_segment(self.project_key),
            path_segment(self.repository_slug),
            path_segment(self.commit_id),
        )

    @property
    def params(self) -> dict[str, str]:
        if self.key is None:
            return {}
        return {"key": self.key}


class BuildStatusGetBuilder(RequestBuilder[BuildStatusGet]):
    request_type = BuildStatusGet
    required = ("project_key", "repository_slug", "commit_id")

    def project_key(self, value: str) -> Self:
        return self._set("project_key", value)

    def repository_slug(self, value: str) -> Self:
        return self._set("repository_slug", value)

    def commit_id(self, value: str) -> Self:
        return self._set("commit_id", value)

    def key(self, value: str | None) -> Self:
        return self._set("key", value)
