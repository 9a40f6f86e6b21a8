"""This module contains the logic to reflect CI builds as GitHub check runs."""

import logging
from typing import Any, Iterable, Optional

from github import Github
from github.CheckRun import CheckRun
from githubapp import Config
from githubapp.event_check_run import CheckRunConclusion, CheckRunStatus
from githubapp.events import IssueCommentCreatedEvent

from src.helpers import comment_helper, github_helper, status_helper
from src.helpers.check_run_helper import get_conclusion, get_status
from src.helpers.exception_helper import describe_error
from src.helpers.external_id import ExternalId
from src.models import BuildInfo, GetJobOutput, JobInfo, StatusInfo

logger = logging.getLogger(__name__)


class CheckRunManager:
    """
    Create the check runs of one build.

    The manager keeps no state besides the constructor arguments, the check runs already created are
    found through the external_id, {domain}/{build_id}/{job_id}, in the head commit.
    """

    def __init__(
        self,
        app_id: int,
        gh: Github,
        build_info: BuildInfo,
        get_job_output: GetJobOutput,
    ):
        self.app_id = app_id
        self.build_info = build_info
        self.get_job_output = get_job_output
        self.repository = github_helper.get_repository(gh, build_info.full_name)

    def checks_to_create(self, jobs: Iterable[JobInfo]) -> list[JobInfo]:
        """
        Return the jobs that need a check run created, in the same order.
        A job needs a check run if there is none for it or if the status or the name changed.
        """
        existing_check_runs = self._get_existing_check_runs()
        to_create = []
        for job in jobs:
            check_run = next(
                iter(c for c in existing_check_runs if self._is_check_run_for_job(c, job)),
                None,
            )
            if (
                check_run is None
                or check_run.status != get_status(job).value
                or check_run.name != job.name
            ):
                to_create.append(job)
        return to_create

    def create_check(self, job: JobInfo) -> Optional[str]:
        """
        Create a check run for the job.
        :return: The check run id or None if the creation failed.
        """
        payload = self._get_create_params(job)
        if payload["status"] == CheckRunStatus.COMPLETED.value:
            self._add_completion_info(payload, job)

        logger.debug("Creating check for job %s: %s", job.job_id, payload)
        try:
            check_run = self.repository.create_check_run(**payload)
        except Exception as err:
            logger.exception(
                "Error occurred creating check for job %s: %s",
                job.job_id,
                describe_error(err),
            )
            return None

        check_run_id = str(check_run.id)
        logger.debug("Check %s created for job %s", check_run_id, job.job_id)
        return check_run_id

    def sync_jobs(self, jobs: Iterable[JobInfo]) -> dict[str, Optional[str]]:
        """Create the check runs for the jobs that changed, returning the created ids by job id"""
        return {job.job_id: self.create_check(job) for job in self.checks_to_create(jobs)}

    def _get_existing_check_runs(self) -> list[CheckRun]:
        """
        Return all the check runs created by this app in the build head commit.
        If the check runs can't be fetched, return an empty list so all the jobs get a check run.
        """
        logger.debug("Fetching existing checks for build %s", self.build_info.id)
        try:
            commit = github_helper.get_commit(self.repository, self.build_info.head_sha)
            check_runs = commit.get_check_runs()
            my_check_runs = [c for c in check_runs if c.app.id == self.app_id]
        except Exception as err:
            logger.exception(
                "Error occurred fetching existing checks for build %s: %s",
                self.build_info.id,
                describe_error(err),
            )
            return []

        logger.debug(
            "Fetched %d existing checks for build %s",
            len(my_check_runs),
            self.build_info.id,
        )
        return my_check_runs

    def _is_check_run_for_job(self, check_run: CheckRun, job: JobInfo) -> bool:
        return ExternalId.decode(check_run.external_id) == ExternalId.for_job(self.build_info, job)

    def _get_create_params(self, job: JobInfo) -> dict[str, Any]:
        payload = {
            "name": job.name,
            "head_sha": self.build_info.head_sha,
            "external_id": ExternalId.for_job(self.build_info, job).encode(),
            "status": get_status(job).value,
        }
        # PyGithub formats the dates itself and can't handle None
        if job.url:
            payload["details_url"] = job.url
        if job.started_at:
            payload["started_at"] = job.started_at
        return payload

    def _add_completion_info(self, payload: dict[str, Any], job: JobInfo) -> None:
        """Add the conclusion, the completion date and the job output to the payload"""
        conclusion = get_conclusion(job)
        payload["conclusion"] = conclusion.value
        if job.finished_at:
            payload["completed_at"] = job.finished_at

        if conclusion == CheckRunConclusion.CANCELLED:
            return

        try:
            output = self.get_job_output(job)
        except Exception:
            logger.exception(
                "Error occurred while getting job output for job %s, output will be skipped",
                job.job_id,
            )
            return
        if output:
            payload["output"] = output.github_dict()


@Config.call_if("check_run_manager.enabled")
def handle_rescan(event: IssueCommentCreatedEvent) -> Optional[StatusInfo]:
    """
    Handle a rescan command commented in a Pull Request.
    Delete the command comment, if configured, and look for the latest Travis build of the head commit.
    """
    issue = event.issue
    if not issue.pull_request:
        return None
    if (event.issue_comment.body or "").strip() != Config.check_run_manager.rescan_command:
        return None

    repository_full_name = event.repository.full_name
    logger.info("Rescan requested for PR %d in %s", issue.number, repository_full_name)
    if Config.check_run_manager.delete_rescan_comment:
        comment_helper.delete_comment(event)

    if status := status_helper.get_latest_travis_status(event):
        logger.info(
            "Latest Travis build for %s@%s: %s",
            status.repository,
            status.sha,
            status.target_url,
        )
    else:
        logger.info("No Travis status found for PR %d in %s", issue.number, repository_full_name)
    return status
