from src.models.ci import (
    BuildInfo,
    CheckRunOutput,
    GetJobOutput,
    JobInfo,
    JobState,
    StatusInfo,
)

__all__ = [
    "BuildInfo",
    "CheckRunOutput",
    "GetJobOutput",
    "JobInfo",
    "JobState",
    "StatusInfo",
]
