import httpx
import pytest
import respx

from bitbucket_server_client import RequestConstructionError
from bitbucket_server_client.api import PullRequestChangesGetBuilder
from bitbucket_server_client.models import ChangeScope, PullRequestChanges

CHANGES_URL = (
    "https://bitbucket.example.com/rest/api/latest/projects/PROJECT_KEY"
    "/repos/REPOSITORY_SLUG/pull-requests/123/changes"
)


def changes_page(**paging) -> dict:
    return {
        "fromHash": "from_hash",
        "toHash": "to_hash",
        "values": [
            {"contentId": "12345", "type": "ADD", "path": {"toString": "path/to/file"}},
            {
                "contentId": "67890",
                "type": "MOVE",
                "path": {
                    "toString": "another/target",
                    "components": ["another", "target"],
                    "name": "target",
                },
                "srcPath": {"toString": "old/target"},
                "nodeType": "FILE",
            },
        ],
        **paging,
    }


class TestPullRequestChangesModel:
    def test_deserialize(self):
        changes = PullRequestChanges.model_validate(changes_page())

        assert changes.fromHash == "from_hash"
        assert [str(item.path) for item in changes.values] == ["path/to/file", "another/target"]
        assert changes.values[1].srcPath.toString == "old/target"
        assert changes.values[0].srcPath is None
        assert changes.isLastPage is None

    def test_values_are_optional(self):
        changes = PullRequestChanges.model_validate({"fromHash": "a", "toHash": "b"})

        assert changes.values is None


class TestPullRequestChangesGet:
    def test_url_and_default_paging(self, client):
        request = client.api().pull_request_changes_get("PROJECT_KEY", "REPOSITORY_SLUG", 123).build()

        assert request.url == CHANGES_URL
        assert request.params == {"start": "0", "limit": "100"}

    def test_all_query_parameters(self, client):
        request = (
            client.api()
            .pull_request_changes_get("PROJECT_KEY", "REPOSITORY_SLUG", "123")
            .start(25)
            .limit(50)
            .change_scope(ChangeScope.RANGE)
            .since_id("aaa")
            .until_id("bbb")
            .with_comments(False)
            .build()
        )

        assert request.params == {
            "start": "25",
            "limit": "50",
            "sinceId": "aaa",
            "changeScope": "RANGE",
            "untilId": "bbb",
            "withComments": "false",
        }

    def test_unset_optional_falls_back_to_default(self, client):
        request = (
            client.api()
            .pull_request_changes_get("PROJECT_KEY", "REPOSITORY_SLUG", 123)
            .limit(10)
            .limit(None)
            .build()
        )

        assert request.limit == 100

    @pytest.mark.parametrize("start, limit", [(-1, 10), (0, 0)])
    def test_invalid_paging(self, client, start, limit):
        builder = (
            client.api()
            .pull_request_changes_get("PROJECT_KEY", "REPOSITORY_SLUG", 123)
            .start(start)
            .limit(limit)
        )

        with pytest.raises(RequestConstructionError):
            builder.build()

    def test_range_requires_bounds(self, client):
        builder = (
            client.api()
            .pull_request_changes_get("PROJECT_KEY", "REPOSITORY_SLUG", 123)
            .change_scope("RANGE")
            .since_id("aaa")
        )

        with pytest.raises(RequestConstructionError, match="until_id"):
            builder.build()

    def test_missing_pull_request_id(self, client):
        builder = (
            PullRequestChangesGetBuilder(client)
            .project_key("PROJECT_KEY")
            .repository_slug("REPOSITORY_SLUG")
        )

        with pytest.raises(RequestConstructionError, match="pull_request_id"):
            builder.build()

    def test_next_page(self, client):
        builder = client.api().pull_request_changes_get("PROJECT_KEY", "REPOSITORY_SLUG", 123)
        first = PullRequestChanges.model_validate(
            changes_page(start=0, limit=2, size=2, isLastPage=False, nextPageStart=2)
        )
        last = PullRequestChanges.model_validate(
            changes_page(start=2, limit=2, size=2, isLastPage=True)
        )

        assert builder.next_page(first) is builder
        assert builder.build().start == 2
        assert builder.next_page(last) is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_send(self, client):
        route = respx.get(CHANGES_URL).mock(
            return_value=httpx.Response(200, json=changes_page(isLastPage=True))
        )

        changes = await (
            client.api()
            .pull_request_changes_get("PROJECT_KEY", "REPOSITORY_SLUG", 123)
            .limit(25)
            .with_comments(True)
            .build()
            .send()
        )

        params = route.calls.last.request.url.params
        assert params["start"] == "0"
        assert params["limit"] == "25"
        assert params["withComments"] == "true"
        assert len(changes.values) == 2
        assert changes.values[0].type == "ADD"
        assert changes.isLastPage is True
