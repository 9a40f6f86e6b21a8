"""Module to create the githubapp Configs"""

from githubapp import Config


def default_configs() -> None:
    """Create the default configs"""
    Config.BOT_NAME = "ci-check-runs[bot]"

    Config.create_config(
        "check_run_manager",
        enabled=True,
        rescan_command="/rescan",
        delete_rescan_comment=True,
    )
