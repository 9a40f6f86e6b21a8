"""Build the GitHub clients used to talk with the checks and statuses APIs"""

import github
from cachetools import TTLCache, cached
from github.Commit import Commit
from github.Repository import Repository
from githubapp.events import IssueCommentCreatedEvent
from githubapp.webhook_handler import _get_auth

PER_PAGE = 100

# The installation auth refreshes its own token, the TTL only bounds the memory
_clients = TTLCache(maxsize=128, ttl=60 * 60)


@cached(_clients)
def get_gh(hook_installation_target_id: int, installation_id: int) -> github.Github:
    """Get the Github object for the given installation, listing 100 items per page"""
    return github.Github(
        auth=_get_auth(hook_installation_target_id, installation_id),
        per_page=PER_PAGE,
    )


def get_repository(gh: github.Github, full_name: str) -> Repository:
    """Get a lazy Repository, no request is made until an attribute is needed"""
    return gh.get_repo(full_name, lazy=True)


def get_commit(repository: Repository, sha: str) -> Commit:
    """
    Get a lazy Commit.
    Listing its statuses or check runs requests only the list endpoints, never the commit itself.
    """
    return Commit(
        requester=repository.requester,
        headers={},
        attributes={"sha": sha, "url": f"{repository.url}/commits/{sha}"},
        completed=False,
    )


def get_event_repository(event: IssueCommentCreatedEvent) -> Repository:
    """Get the event Repository through the installation client"""
    gh = get_gh(event.hook_installation_target_id, event.installation_id)
    return get_repository(gh, event.repository.full_name)
