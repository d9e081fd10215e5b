"""
Main Spec Drift Guard API

Orchestrates one gate run: identifier extraction, changed-file
retrieval, coverage matching and the final decision.
"""

import logging
from typing import Optional
from datetime import datetime
from dataclasses import dataclass

from .config import GuardConfig
from .coverage.extractor import IdentifierExtractor
from .coverage.matcher import CoverageMatcher
from .coverage.decision import DecisionEngine
from .github.client import GitHubClient
from .github.fetcher import ChangeSetFetcher
from .models.change_set import ChangeSet
from .models.event import PullRequestInfo, RepositoryCoordinates
from .models.outcome import Decision


logger = logging.getLogger(__name__)


SKIP_MESSAGE = "Spec Drift Guard: not a pull_request event. Skipping."


@dataclass
class GuardResult:
    """Result of one gate run."""
    status: str  # 'skipped' or 'completed'
    decision: Optional[Decision]
    files_checked: int
    processing_time: float
    created_at: datetime

    @property
    def message(self) -> str:
        return self.decision.message if self.decision else SKIP_MESSAGE

    @property
    def level(self) -> str:
        return self.decision.level if self.decision else "notice"

    @property
    def exit_code(self) -> int:
        return self.decision.exit_code if self.decision else 0


class SpecDriftGuard:
    """
    Main Spec Drift Guard interface.

    Runs the gate for one pull request:
    1. Extract AC identifiers from the PR description
    2. Fetch every changed file (only when identifiers exist)
    3. Match identifiers against paths and patches
    4. Decide pass / warn / fail
    """

    def __init__(self, config: GuardConfig, client: Optional[GitHubClient] = None):
        """
        Initialize the guard.

        Args:
            config: Validated configuration
            client: Optional preconfigured GitHub client
        """
        self.config = config

        self.extractor = IdentifierExtractor(config.policy.ac_pattern)
        self.client = client or GitHubClient(
            token=config.github.token,
            base_url=config.github.api_base_url,
            timeout_seconds=config.github.timeout_seconds,
            max_retries=config.github.max_retries,
        )
        self.fetcher = ChangeSetFetcher(self.client, page_size=config.github.page_size)
        self.matcher = CoverageMatcher()
        self.engine = DecisionEngine(
            require_at_least_one=config.policy.require_at_least_one,
            fail_on_missing_coverage=config.policy.fail_on_missing_coverage,
        )

    def run(
        self,
        pull_request: Optional[PullRequestInfo],
        repository: Optional[RepositoryCoordinates]
    ) -> GuardResult:
        """
        Run the gate.

        Args:
            pull_request: PR descriptor, or None outside a PR event
            repository: Repository under test

        Returns:
            GuardResult with the decision

        Raises:
            ConfigurationError: For an unusable pattern or coordinates
            RetrievalError: If the change set cannot be fetched completely
        """
        start_time = datetime.now()

        if pull_request is None:
            logger.info("No pull request context, skipping")
            return GuardResult(
                status="skipped",
                decision=None,
                files_checked=0,
                processing_time=(datetime.now() - start_time).total_seconds(),
                created_at=start_time,
            )

        if repository is None:
            repository = RepositoryCoordinates.parse(self.config.repository)

        logger.info(f"Checking {repository}#{pull_request.number}")

        identifiers = self.extractor.extract(pull_request.body)
        change_set = ChangeSet()

        if identifiers:
            change_set = self.fetcher.fetch(repository.owner, repository.name, pull_request.number)
            coverage = self.matcher.match(identifiers, change_set)
            decision = self.engine.decide(identifiers, coverage)
        else:
            decision = self.engine.decide(identifiers)

        processing_time = (datetime.now() - start_time).total_seconds()
        logger.info(f"Gate finished: {decision.outcome.value} ({processing_time:.2f}s)")

        return GuardResult(
            status="completed",
            decision=decision,
            files_checked=len(change_set),
            processing_time=processing_time,
            created_at=start_time,
        )
