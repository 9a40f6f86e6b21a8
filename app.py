"""This module contains the main application logic."""

import logging
import os
import sys
from typing import NoReturn, Optional

import markdown
import sentry_sdk
from flask import Flask, Response, jsonify, request
from flask.cli import load_dotenv
from githubapp import webhook_handler
from githubapp.events import IssueCommentCreatedEvent
from pydantic import BaseModel, ValidationError

from config import default_configs
from src.helpers import github_helper, signature_helper
from src.managers import check_run_manager
from src.managers.check_run_manager import CheckRunManager
from src.models import BuildInfo, CheckRunOutput, JobInfo

logging.basicConfig(
    stream=sys.stdout,
    format="%(levelname)s:%(module)s:%(funcName)s:%(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)


def sentry_init() -> NoReturn:  # pragma: no cover
    """Initialize sentry only if SENTRY_DSN is present"""
    if sentry_dsn := os.getenv("SENTRY_DSN"):
        # Initialize Sentry SDK for error logging
        sentry_sdk.init(
            dsn=sentry_dsn,
            # Set traces_sample_rate to 1.0 to capture 100%
            # of transactions for performance monitoring.
            traces_sample_rate=1.0,
        )
        logger.info("Sentry initialized")


app = Flask(__name__)
sentry_init()
webhook_handler.handle_with_flask(
    app, use_default_index=False, config_file=".ci-check-runs.yaml"
)

load_dotenv()
default_configs()


class JobPayload(JobInfo):
    """A job as sent by the CI, with the output already collected"""

    output: Optional[CheckRunOutput] = None


class SyncBuildRequest(BaseModel):
    """Body of the /builds endpoint"""

    installation_id: int
    build: BuildInfo
    jobs: list[JobPayload]


@webhook_handler.add_handler(IssueCommentCreatedEvent)
def handle_issue_comment(event: IssueCommentCreatedEvent) -> NoReturn:
    """
    handle the Issue Comment Created event
    Calling the Check Run manager to handle the rescan command
    """
    check_run_manager.handle_rescan(event)


@app.route("/builds", methods=["POST"])
def sync_build_endpoint() -> tuple[Response, int]:
    """
    Create the check runs for the jobs of a build that changed since the last sync
    The body must be signed with the BUILDS_SECRET, like GitHub signs the webhooks
    """
    if not signature_helper.is_valid_signature(
        os.getenv("BUILDS_SECRET"),
        request.get_data(),
        request.headers.get(signature_helper.SIGNATURE_HEADER),
    ):
        logger.warning("Invalid signature for /builds request from %s", request.remote_addr)
        return jsonify({"error": "Invalid signature"}), 401
    if not (app_id := os.getenv("GITHUB_APP_ID")):
        logger.error("GITHUB_APP_ID is not configured")
        return jsonify({"error": "GITHUB_APP_ID is not configured"}), 500

    try:
        sync_request = SyncBuildRequest.model_validate(request.get_json(force=True))
    except ValidationError as err:
        return jsonify({"error": str(err)}), 400

    outputs = {job.job_id: job.output for job in sync_request.jobs}
    manager = CheckRunManager(
        int(app_id),
        github_helper.get_gh(int(app_id), sync_request.installation_id),
        sync_request.build,
        lambda job: outputs.get(job.job_id),
    )
    check_runs = manager.sync_jobs(sync_request.jobs)
    logger.info(
        "%d check runs created for build %s in %s",
        len(check_runs),
        sync_request.build.id,
        sync_request.build.full_name,
    )
    return jsonify({"check_runs": check_runs}), 200


@app.route("/", methods=["GET"])
def index() -> str:  # pragma: no cover
    """Return the index homepage"""
    with open("README.md") as f:
        md = f.read()
    return markdown.markdown(md)
