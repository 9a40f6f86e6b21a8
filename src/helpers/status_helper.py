"""Helper to find commit statuses reported by other CIs"""

import logging
from typing import Optional

from githubapp.events import IssueCommentCreatedEvent

from src.helpers import github_helper
from src.models import StatusInfo

logger = logging.getLogger(__name__)

TRAVIS_CONTEXT = "continuous-integration/travis-ci/pr"


def get_latest_travis_status(event: IssueCommentCreatedEvent) -> Optional[StatusInfo]:
    """
    Return the latest Travis status of the Pull Request head commit.
    The statuses are listed newest first and the pagination stops at the first match.

    :param event: The issue comment event in a Pull Request.
    :return: The StatusInfo or None if there is no head commit, no Travis status or an error occurred.
    """
    repository_full_name = event.repository.full_name
    pull_request_number = event.issue.number
    try:
        repository = github_helper.get_event_repository(event)
        pull_request = repository.get_pull(pull_request_number)
        if not pull_request.head:
            return None

        head_sha = pull_request.head.sha
        statuses = github_helper.get_commit(repository, head_sha).get_statuses()
        travis_status = next(
            iter(status for status in statuses if status.context == TRAVIS_CONTEXT),
            None,
        )
        if travis_status is None:
            return None

        return StatusInfo(
            repository=repository_full_name,
            sha=head_sha,
            target_url=travis_status.target_url,
        )
    except Exception:
        logger.exception(
            "Error occurred fetching latest Travis status for PR %d in %s",
            pull_request_number,
            repository_full_name,
        )
        return None
