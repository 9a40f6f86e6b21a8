"""CI build models"""

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Callable, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict


class JobState(Enum):
    """Known CI job states"""

    QUEUED = "queued"
    STARTED = "started"
    PASSED = "passed"
    FAILED = "failed"
    ERRORED = "errored"
    CANCELED = "canceled"


def _without_slash(value: str) -> str:
    """The external id uses "/" as separator, so it can't be part of the identifiers"""
    if "/" in value:
        raise ValueError(f"{value!r} must not contain '/'")
    return value


Identifier = Annotated[str, AfterValidator(_without_slash)]


def _to_utc(value: datetime) -> datetime:
    """GitHub receives the dates formatted as UTC, naive dates are considered UTC already"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


Timestamp = Annotated[datetime, AfterValidator(_to_utc)]


class BuildInfo(BaseModel):
    """One CI build attached to one commit of one repository"""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    id: Identifier
    domain: Identifier
    owner: str
    repo: str
    head_sha: str

    @property
    def full_name(self) -> str:
        """Return the repository full name {owner}/{repo}"""
        return f"{self.owner}/{self.repo}"


class JobInfo(BaseModel):
    """One job within a build"""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    job_id: Identifier
    name: str
    url: Optional[str] = None
    state: str = JobState.QUEUED.value
    started_at: Optional[Timestamp] = None
    finished_at: Optional[Timestamp] = None
    ignore_failure: bool = False


class StatusInfo(BaseModel):
    """A commit status previously reported by a CI"""

    repository: str
    sha: str
    target_url: Optional[str] = None


class CheckRunOutput(BaseModel):
    """The output block of a check run"""

    title: str
    summary: str
    text: Optional[str] = None

    def github_dict(self) -> dict[str, str]:
        """Returns a dict that the checks API will understand"""
        return self.model_dump(exclude_none=True)


GetJobOutput = Callable[[JobInfo], Optional[CheckRunOutput]]
