"""Translate CI job states to the check run vocabulary"""

from githubapp.event_check_run import CheckRunConclusion, CheckRunStatus

from src.models import JobInfo, JobState

FINISHED_STATES = (
    JobState.PASSED.value,
    JobState.FAILED.value,
    JobState.ERRORED.value,
    JobState.CANCELED.value,
)


def get_status(job: JobInfo) -> CheckRunStatus:
    """
    Return the check run status for the job state.
    Unknown states are considered queued.
    """
    if job.state in FINISHED_STATES:
        return CheckRunStatus.COMPLETED
    if job.state == JobState.STARTED.value:
        return CheckRunStatus.IN_PROGRESS
    return CheckRunStatus.QUEUED


def get_conclusion(job: JobInfo) -> CheckRunConclusion:
    """Return the check run conclusion for a finished job"""
    if job.state == JobState.PASSED.value:
        return CheckRunConclusion.SUCCESS
    if job.state == JobState.FAILED.value and not job.ignore_failure:
        return CheckRunConclusion.FAILURE
    if job.state == JobState.CANCELED.value:
        return CheckRunConclusion.CANCELLED
    return CheckRunConclusion.NEUTRAL
