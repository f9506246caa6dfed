import json

import httpx
import pytest
import respx

from bitbucket_server_client import HttpClientError, RequestConstructionError
from bitbucket_server_client.api import PullRequestPostBuilder
from bitbucket_server_client.models import (
    ProjectInfo,
    PullRequestPostPayload,
    RefInfo,
    RepositoryInfo,
    Reviewer,
    User,
)

PULL_REQUESTS_URL = (
    "https://bitbucket.example.com/rest/api/latest/projects/PROJECT_KEY"
    "/repos/REPOSITORY_SLUG/pull-requests"
)


def ref(ref_id: str) -> RefInfo:
    return RefInfo(
        id=ref_id,
        repository=RepositoryInfo(slug="my-repo", project=ProjectInfo(key="PROJECT_KEY")),
    )


@pytest.fixture
def payload() -> PullRequestPostPayload:
    return PullRequestPostPayload(
        title="Add new feature",
        description="Implements the new feature",
        fromRef=ref("refs/heads/feature"),
        toRef=ref("refs/heads/main"),
        reviewers=[Reviewer(user=User(name="reviewer1"))],
    )


class TestPullRequestPostPayload:
    def test_serialize(self, payload):
        assert json.loads(payload.to_json()) == {
            "title": "Add new feature",
            "description": "Implements the new feature",
            "fromRef": {
                "id": "refs/heads/feature",
                "repository": {"slug": "my-repo", "project": {"key": "PROJECT_KEY"}},
            },
            "toRef": {
                "id": "refs/heads/main",
                "repository": {"slug": "my-repo", "project": {"key": "PROJECT_KEY"}},
            },
            "reviewers": [{"user": {"name": "reviewer1"}}],
        }

    def test_serialize_partially(self):
        payload = PullRequestPostPayload(
            title="Test PR", fromRef=ref("refs/heads/feature"), toRef=ref("refs/heads/main")
        )

        assert set(json.loads(payload.to_json())) == {"title", "fromRef", "toRef"}

    def test_branch_ref(self):
        assert RefInfo.branch("feature", "my-repo", "PROJECT_KEY") == ref("refs/heads/feature")
        assert RefInfo.branch("refs/tags/v1", "my-repo", "PROJECT_KEY").id == "refs/tags/v1"
        assert Reviewer.named("reviewer1") == Reviewer(user=User(name="reviewer1"))


class TestPullRequestPost:
    def test_request(self, client, payload):
        request = client.api().pull_request_post("PROJECT_KEY", "REPOSITORY_SLUG", payload).build()

        assert request.method == "POST"
        assert request.url == PULL_REQUESTS_URL
        body = json.loads(request.body)
        assert body["fromRef"]["id"] == "refs/heads/feature"
        assert body["toRef"]["id"] == "refs/heads/main"

    def test_missing_payload(self, client):
        builder = PullRequestPostBuilder(client).project_key("PROJECT_KEY").repository_slug("REPOSITORY_SLUG")

        with pytest.raises(RequestConstructionError, match="pull_request"):
            builder.build()

    @pytest.mark.asyncio
    @respx.mock
    async def test_send(self, client, payload):
        created = {
            "id": 42,
            "version": 0,
            "state": "OPEN",
            "open": True,
            **json.loads(payload.to_json()),
        }
        route = respx.post(PULL_REQUESTS_URL).mock(return_value=httpx.Response(201, json=created))

        result = await (
            client.api().pull_request_post("PROJECT_KEY", "REPOSITORY_SLUG", payload).build().send()
        )

        sent = json.loads(route.calls.last.request.content)
        assert sent["fromRef"]["id"] == "refs/heads/feature"
        assert sent["toRef"]["id"] == "refs/heads/main"
        assert result == payload

    @pytest.mark.asyncio
    @respx.mock
    async def test_conflict(self, client, payload):
        body = '{"errors":[{"exceptionName":"DuplicatePullRequestException"}]}'
        respx.post(PULL_REQUESTS_URL).mock(return_value=httpx.Response(409, text=body))

        with pytest.raises(HttpClientError) as exc_info:
            await client.api().pull_request_post("PROJECT_KEY", "REPOSITORY_SLUG", payload).build().send()
        assert exc_info.value.status_code == 409
        assert exc_info.value.body == body
