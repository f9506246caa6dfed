from enum import StrEnum
from typing import Literal

from pydantic import BaseModel

ChangeType = Literal["ADD", "COPY", "DELETE", "MODIFY", "MOVE", "UNKNOWN"]


class ChangeScope(StrEnum):
    ALL = "ALL"
    UNREVIEWED = "UNREVIEWED"
    RANGE = "RANGE"


class Path(BaseModel):
    toString: str
    # path split into parts
    components: list[str] | None = None
    # path to parent
    parent: str | None = None
    # filename including extension
    name: str | None = None
    # file extension only
    extension: str | None = None

    def __str__(self):
        return self.toString


class ChangeItem(BaseModel):
    contentId: str
    fromContentId: str | None = None
    type: ChangeType
    path: Path
    srcPath: Path | None = None
    nodeType: Literal["DIRECTORY", "FILE", "SUBMODULE"] | None = None
    executable: bool | None = None
    percentUnchanged: int | None = None


class PullRequestChanges(BaseModel):
    """One page of the files touched by a pull request.

    The paging fields are only present when the server sends them; use
    ``nextPageStart`` as the ``start`` of the following request.
    """

    fromHash: str
    toHash: str
    values: list[ChangeItem] | None = None
    size: int | None = None
    limit: int | None = None
    start: int | None = None
    isLastPage: bool | None = None
    nextPageStart: int | None = None


class ProjectInfo(BaseModel):
    key: str


class RepositoryInfo(BaseModel):
    slug: str
    project: ProjectInfo

    def __str__(self):
        return f"<Repo: {self.project.key}/{self.slug}>"


class RefInfo(BaseModel):
    # fully qualified, e.g. refs/heads/main
    id: str
    repository: RepositoryInfo

    @classmethod
    def branch(cls, name: str, repository_slug: str, project_key: str) -> "RefInfo":
        ref_id = name if name.startswith("refs/") else f"refs/heads/{name}"
        return cls(
            id=ref_id,
            repository=RepositoryInfo(
                slug=repository_slug, project=ProjectInfo(key=project_key)
            ),
        )


class User(BaseModel):
    name: str


class Reviewer(BaseModel):
    user: User

    @classmethod
    def named(cls, name: str) -> "Reviewer":
        return cls(user=User(name=name))


class PullRequestPostPayload(BaseModel):
    title: str
    description: str | None = None
    fromRef: RefInfo
    toRef: RefInfo
    reviewers: list[Reviewer] | None = None

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)
