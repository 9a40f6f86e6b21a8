"""Helper to manage Pull Request comments"""

import logging

from githubapp.events import IssueCommentCreatedEvent

logger = logging.getLogger(__name__)


def delete_comment(event: IssueCommentCreatedEvent) -> None:
    """
    Delete the event comment.
    The deletion is best-effort, any error is logged and ignored.
    """
    try:
        event.issue_comment.delete()
    except Exception:
        logger.exception(
            "Error occurred deleting rescan comment for PR %d in %s",
            event.issue.number,
            event.repository.full_name,
        )
