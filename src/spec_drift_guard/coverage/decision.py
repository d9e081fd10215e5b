"""
Decision Engine

Turns identifiers and their coverage into the run's pass/warn/fail outcome.
"""

import logging
from typing import List, Optional

from ..models.outcome import CoverageResult, Decision, Outcome
from ..formatting.summary import SummaryFormatter


logger = logging.getLogger(__name__)


NO_IDENTIFIERS_MESSAGE = "No acceptance criteria IDs found in PR description."
ALL_COVERED_MESSAGE = "Spec Drift Guard: all AC IDs covered."
MISSING_MESSAGE = "Spec drift detected. Missing AC IDs in changes: {missing}"


class DecisionEngine:
    """
    Applies the gate policy.

    No identifiers is a neutral notice unless require_at_least_one is
    set. Missing coverage fails unless fail_on_missing_coverage is
    turned off, in which case it only warns. Exit codes are left to
    the caller.
    """

    def __init__(
        self,
        require_at_least_one: bool = False,
        fail_on_missing_coverage: bool = True,
        formatter: Optional[SummaryFormatter] = None
    ):
        self.require_at_least_one = require_at_least_one
        self.fail_on_missing_coverage = fail_on_missing_coverage
        self.formatter = formatter or SummaryFormatter()

    def decide(self, identifiers: List[str], coverage: Optional[CoverageResult] = None) -> Decision:
        """
        Produce the final decision.

        Args:
            identifiers: Extracted identifiers, possibly empty
            coverage: Coverage for exactly those identifiers; unused
                when there are none

        Returns:
            Decision with outcome, missing identifiers and report

        Raises:
            ValueError: If coverage does not match the identifiers
        """
        if not identifiers:
            return self._decide_no_identifiers()

        if coverage is None or coverage.identifiers != list(identifiers):
            raise ValueError("Coverage result must hold exactly the extracted identifiers")

        report = self.formatter.format_coverage(identifiers, coverage)
        missing = coverage.missing

        if not missing:
            logger.info(f"All {len(identifiers)} identifiers covered")
            return Decision(
                outcome=Outcome.PASS,
                identifiers=list(identifiers),
                missing=[],
                message=ALL_COVERED_MESSAGE,
                report=report,
                coverage=coverage,
            )

        outcome = (
            Outcome.FAIL_MISSING_COVERAGE if self.fail_on_missing_coverage
            else Outcome.WARN_MISSING_COVERAGE
        )
        logger.info(f"{len(missing)} of {len(identifiers)} identifiers missing: {outcome.value}")
        return Decision(
            outcome=outcome,
            identifiers=list(identifiers),
            missing=missing,
            message=MISSING_MESSAGE.format(missing=", ".join(missing)),
            report=report,
            coverage=coverage,
        )

    def _decide_no_identifiers(self) -> Decision:
        outcome = (
            Outcome.FAIL_NO_IDENTIFIERS if self.require_at_least_one
            else Outcome.WARN_NO_IDENTIFIERS
        )
        logger.info(f"No identifiers in PR description: {outcome.value}")
        return Decision(
            outcome=outcome,
            identifiers=[],
            missing=[],
            message=NO_IDENTIFIERS_MESSAGE,
            report=self.formatter.format_no_identifiers(NO_IDENTIFIERS_MESSAGE),
        )
