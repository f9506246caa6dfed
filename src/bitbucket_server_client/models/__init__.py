from bitbucket_server_client.models.build_status import (
    BuildStatus,
    BuildStatusPostPayload,
    BuildStatusState,
    TestResults,
)
from bitbucket_server_client.models.pull_request import (
    ChangeItem,
    ChangeScope,
    ChangeType,
    Path,
    ProjectInfo,
    PullRequestChanges,
    PullRequestPostPayload,
    RefInfo,
    RepositoryInfo,
    Reviewer,
    User,
)

__all__ = [
    "BuildStatus",
    "BuildStatusPostPayload",
    "BuildStatusState",
    "ChangeItem",
    "ChangeScope",
    "ChangeType",
    "Path",
    "ProjectInfo",
    "PullRequestChanges",
    "PullRequestPostPayload",
    "RefInfo",
    "RepositoryInfo",
    "Reviewer",
    "TestResults",
    "User",
]
