from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, field_serializer, field_validator


class BuildStatusState(StrEnum):
    UNKNOWN = "UNKNOWN"
    SUCCESSFUL = "SUCCESSFUL"
    FAILED = "FAILED"
    INPROGRESS = "INPROGRESS"
    CANCELLED = "CANCELLED"

    @classmethod
    def _missing_(cls, value: object) -> "BuildStatusState | None":
        # states added by newer servers are not an error
        if isinstance(value, str):
            return cls.UNKNOWN
        return None


class TestResults(BaseModel):
    failed: int
    successful: int
    skipped: int


def _epoch_seconds(value: datetime | None) -> int | None:
    if value is None:
        return None
    return int(value.timestamp())


class _BuildStatusBase(BaseModel):
    key: str
    state: BuildStatusState
    url: str
    buildNumber: str | None = None
    description: str | None = None
    # milliseconds
    duration: int | None = None
    name: str | None = None
    parent: str | None = None
    ref: str | None = None
    testResults: TestResults | None = None

    @field_validator("state", mode="before")
    @classmethod
    def _lenient_state(cls, value: Any) -> Any:
        if isinstance(value, BuildStatusState):
            return value
        if isinstance(value, str):
            return BuildStatusState(value)
        raise ValueError(f"state must be a string, got {type(value).__name__}")


class BuildStatus(_BuildStatusBase):
    """A build result attached to a commit, as returned by the server.

    Dates travel as epoch seconds and are exposed as timezone aware datetimes.
    """

    createdDate: datetime | None = None
    updatedDate: datetime | None = None

    @field_serializer("createdDate", "updatedDate")
    def _dates_as_epoch(self, value: datetime | None) -> int | None:
        return _epoch_seconds(value)

    def __str__(self):
        return f"BuildStatus(key={self.key}, state={self.state})"


class BuildStatusPostPayload(_BuildStatusBase):
    state: BuildStatusState = BuildStatusState.UNKNOWN
    dateAdded: datetime | None = None

    @field_serializer("dateAdded")
    def _date_as_epoch(self, value: datetime | None) -> int | None:
        return _epoch_seconds(value)

    def to_json(self) -> str:
        """Wire form: absent optionals are left out instead of sent as null."""
        return self.model_dump_json(exclude_none=True)
