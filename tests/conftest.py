from unittest.mock import Mock, patch

import pytest
from githubapp.events import IssueCommentCreatedEvent

from config import default_configs
from src.managers.check_run_manager import CheckRunManager
from src.models import BuildInfo, JobInfo

default_configs()

APP_ID = 1


@pytest.fixture
def build_info():
    return BuildInfo(id="42", domain="ci", owner="o", repo="r", head_sha="abc")


@pytest.fixture
def make_job():
    def _make_job(job_id="7", name="build", state="started", **kwargs):
        return JobInfo(job_id=job_id, name=name, state=state, **kwargs)

    return _make_job


@pytest.fixture
def make_check_run():
    def _make_check_run(external_id="ci/42/7", status="in_progress", name="build", app_id=APP_ID):
        check_run = Mock(external_id=external_id, status=status, app=Mock(id=app_id))
        # "name" is a Mock constructor argument, it must be set after
        check_run.name = name
        return check_run

    return _make_check_run


@pytest.fixture
def repository_mock():
    repository = Mock(full_name="o/r")
    repository.create_check_run.return_value = Mock(id=123)
    return repository


@pytest.fixture
def get_commit():
    with patch("src.helpers.github_helper.get_commit") as get_commit:
        yield get_commit


@pytest.fixture
def commit(get_commit):
    return get_commit.return_value


@pytest.fixture
def check_runs(commit):
    check_runs = []
    commit.get_check_runs.return_value = check_runs
    return check_runs


@pytest.fixture
def gh(repository_mock):
    gh = Mock()
    gh.get_repo.return_value = repository_mock
    return gh


@pytest.fixture
def get_job_output():
    return Mock(return_value=None)


@pytest.fixture
def manager(gh, build_info, get_job_output):
    return CheckRunManager(APP_ID, gh, build_info, get_job_output)


@pytest.fixture
def event():
    return Mock(
        spec=IssueCommentCreatedEvent,
        hook_installation_target_id=APP_ID,
        installation_id=2,
        repository=Mock(full_name="o/r"),
        issue=Mock(number=123, pull_request=Mock()),
        issue_comment=Mock(body="/rescan"),
    )
