"""
Coverage Matcher

Decides which identifiers are referenced by a pull request's changed files.
"""

import logging
from typing import List, Optional

from ..models.change_set import ChangeSet, ChangedFile
from ..models.outcome import CoverageResult


logger = logging.getLogger(__name__)


class CoverageMatcher:
    """
    Matches identifiers against a complete change set.

    An identifier is covered when any changed file's path or patch
    contains it verbatim. Files are never consumed, so one file may
    cover several identifiers. Files without a patch can still cover
    through their path, which over-approximates pure renames.
    """

    def find_covering_file(self, identifier: str, change_set: ChangeSet) -> Optional[ChangedFile]:
        """Return the first file that covers the identifier, or None."""
        for changed_file in change_set:
            if changed_file.contains(identifier):
                return changed_file
        return None

    def covers(self, identifier: str, change_set: ChangeSet) -> bool:
        return self.find_covering_file(identifier, change_set) is not None

    def match(self, identifiers: List[str], change_set: ChangeSet) -> CoverageResult:
        """
        Evaluate coverage for every identifier.

        Args:
            identifiers: Extracted identifiers
            change_set: All files changed by the pull request

        Returns:
            CoverageResult holding exactly the given identifiers
        """
        coverage = {}
        evidence = {}

        for identifier in identifiers:
            covering = self.find_covering_file(identifier, change_set)
            coverage[identifier] = covering is not None
            if covering is not None:
                evidence[identifier] = covering.path
                logger.debug(f"{identifier} covered by {covering.path}")
            else:
                logger.debug(f"{identifier} not referenced by any of {len(change_set)} changed files")

        result = CoverageResult(coverage=coverage, evidence=evidence)
        logger.info(f"Coverage: {len(result.covered)}/{len(identifiers)} identifiers referenced")
        return result
