"""Command-line entry point for Spec Drift Guard."""

import os
import sys
import logging
from typing import Optional

import click

from . import __version__
from .api import SpecDriftGuard
from .config import ConfigurationError, GuardConfig, setup_logging
from .formatting.actions import ActionsReporter
from .formatting.summary import SummaryFormatter
from .github.client import RetrievalError
from .github.event import load_pull_request
from .models.event import RepositoryCoordinates


logger = logging.getLogger(__name__)


def _load_config(config_path: Optional[str], log_level: Optional[str]) -> GuardConfig:
    """Build and validate the run configuration."""
    if config_path:
        config = GuardConfig.from_yaml(config_path)
        if not config.github.token:
            config.github.token = os.environ.get("GITHUB_TOKEN")
    else:
        config = GuardConfig.from_env()

    if log_level:
        config.logging.level = log_level

    config.validate()
    return config


def run_guard(config: GuardConfig, reporter: ActionsReporter) -> int:
    """Run the gate once and report it. Returns the process exit status."""
    try:
        pull_request = load_pull_request(config.event_path)
        if pull_request is None:
            guard_result = SpecDriftGuard(config).run(None, None)
            reporter.notice(guard_result.message)
            return guard_result.exit_code

        repository = RepositoryCoordinates.parse(config.repository)
        guard_result = SpecDriftGuard(config).run(pull_request, repository)
    except (ConfigurationError, RetrievalError) as e:
        logger.error(f"Spec Drift Guard aborted: {e}")
        reporter.write_summary(SummaryFormatter().format_error(str(e)))
        reporter.error(str(e))
        return 1

    reporter.report(guard_result.decision)
    return guard_result.exit_code


@click.command()
@click.option("--config", "config_path", default=None, type=click.Path(dir_okay=False),
              help="YAML config file. Defaults to GitHub Actions inputs from the environment.")
@click.option("--log-level", default=None, help="Override the log level (DEBUG, INFO, ...).")
@click.version_option(version=__version__, prog_name="spec-drift-guard")
def main(config_path: Optional[str], log_level: Optional[str]):
    """Check that AC IDs in the PR description appear in the PR's changed files."""
    try:
        config = _load_config(config_path, log_level)
    except ConfigurationError as e:
        ActionsReporter().error(str(e))
        sys.exit(1)

    setup_logging(config.logging)
    reporter = ActionsReporter(
        summary_path=config.summary_path,
        emit_summary=config.policy.emit_summary,
    )
    sys.exit(run_guard(config, reporter))


if __name__ == "__main__":
    main()
