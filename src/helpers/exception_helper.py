"""Module to describe the errors raised by the GitHub API"""

from typing import Any

from github import GithubException


def _error_item_message(error: Any) -> str:
    """
    GitHub "errors" items are plain strings or dicts,
    either with a "message" or with the invalid "field" and the error "code"
    """
    if not isinstance(error, dict):
        return str(error)
    if error.get("message"):
        return error["message"]
    if error.get("field") and error.get("code"):
        return f"{error['field']} {error['code']}"
    return str(error)


def describe_error(exception: Exception) -> str:
    """
    Return a human readable message for the exception.
    For GithubException the message comes from the response payload, falling back to the status code.
    """
    if not isinstance(exception, GithubException):
        return str(exception)

    data = exception.data if isinstance(exception.data, dict) else {}
    if errors := data.get("errors"):
        return "; ".join(_error_item_message(error) for error in errors)
    return data.get("message") or f"GitHub API error {exception.status}"
