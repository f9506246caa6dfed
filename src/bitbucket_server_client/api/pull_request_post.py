"""POST a new pull request.

The authenticated user needs REPO_WRITE on the repository. The response echoes
the created pull request; only the fields of the payload are kept.
"""

from typing import Self

from bitbucket_server_client.api.request import ApiRequest, RequestBuilder, path_segment
from bitbucket_server_client.models import PullRequestPostPayload


class PullRequestPost(ApiRequest[PullRequestPostPayload]):
    method = "POST"
    output = PullRequestPostPayload

    project_key: str
    repository_slug: str
    pull_request: PullRequestPostPayload

    @property
    def path(self) -> str:
        return "api/latest/projects/{}/repos/{}/pull-requests".format(
            path_segment(self.project_key),
            path_segment(self.repository_slug),
        )

    @property
    def body(self) -> str:
        return self.pull_request.to_json()


class PullRequestPostBuilder(RequestBuilder[PullRequestPost]):
    request_type = PullRequestPost
    required = ("project_key", "repository_slug", "pull_request")

    def project_key(self, value: str) -> Self:
        return self._set("project_key", value)

    def repository_slug(self, value: str) -> Self:
        return self._set("repository_slug", value)

    def pull_request(self, value: PullRequestPostPayload) -> Self:
        return self._set("pull_request", value)
