"""GET the changes (files) of a pull request, one page at a time."""

from typing import Self

from pydantic import Field, model_validator

from bitbucket_server_client.api.request import ApiRequest, RequestBuilder, path_segment
from bitbucket_server_client.models import ChangeScope, PullRequestChanges

# Client side defaults, the server's own default page size differs by version.
DEFAULT_START = 0
DEFAULT_LIMIT = 100


class PullRequestChangesGet(ApiRequest[PullRequestChanges]):
    output = PullRequestChanges

    project_key: str
    repository_slug: str
    pull_request_id: str
    # "since" commit of a RANGE scope
    since_id: str | None = None
    change_scope: ChangeScope | None = None
    # "until" commit of a RANGE scope
    until_id: str | None = None
    start: int = Field(default=DEFAULT_START, ge=0)
    limit: int = Field(default=DEFAULT_LIMIT, gt=0)
    with_comments: bool | None = None

    @model_validator(mode="after")
    def _range_needs_bounds(self) -> Self:
        if self.change_scope == ChangeScope.RANGE and not (self.since_id and self.until_id):
            raise ValueError("change_scope RANGE requires since_id and until_id")
        return self

    @property
    def path(self) -> str:
        return "api/latest/projects/{}/repos/{}/pull-requests/{}/changes".format(
            path_segment(self.project_key),
            path_segment(self.repository_slug),
            path_segment(self.pull_request_id),
        )

    @property
    def params(self) -> dict[str, str]:
        params = {"start": str(self.start), "limit": str(self.limit)}
        if self.since_id is not None:
            params["sinceId"] = self.since_id
        if self.change_scope is not None:
            params["changeScope"] = self.change_scope.value
        if self.until_id is not None:
            params["untilId"] = self.until_id
        if self.with_comments is not None:
            params["withComments"] = "true" if self.with_comments else "false"
        return params


class PullRequestChangesGetBuilder(RequestBuilder[PullRequestChangesGet]):
    request_type = PullRequestChangesGet
    required = ("project_key", "repository_slug", "pull_request_id")

    def project_key(self, value: str) -> Self:
        return self._set("project_key", value)

    def repository_slug(self, value: str) -> Self:
        return self._set("repository_slug", value)

    def pull_request_id(self, value: int | str) -> Self:
        return self._set("pull_request_id", None if value is None else str(value))

    def since_id(self, value: str | None) -> Self:
        return self._set("since_id", value)

    def change_scope(self, value: ChangeScope | str | None) -> Self:
        return self._set("change_scope", value)

    def until_id(self, value: str | None) -> Self:
        return self._set("until_id", value)

    def start(self, value: int | None) -> Self:
        return self._set("start", value)

    def limit(self, value: int | None) -> Self:
        return self._set("limit", value)

    def with_comments(self, value: bool | None) -> Self:
        return self._set("with_comments", value)

    def next_page(self, page: PullRequestChanges) -> Self | None:
        """Point ``start`` at the page after ``page``, or return None on the last one."""
        if page.isLastPage or page.nextPageStart is None:
            return None
        return self.start(page.nextPageStart)
