"""
Outcome Data Models

게이트 판정 결과 관련 데이터 모델들
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class Outcome(str, Enum):
    """Final classification of one run."""
    PASS = "pass"
    WARN_NO_IDENTIFIERS = "warn-no-identifiers"
    FAIL_NO_IDENTIFIERS = "fail-no-identifiers"
    WARN_MISSING_COVERAGE = "warn-missing-coverage"
    FAIL_MISSING_COVERAGE = "fail-missing-coverage"

    @property
    def is_failure(self) -> bool:
        return self in (Outcome.FAIL_NO_IDENTIFIERS, Outcome.FAIL_MISSING_COVERAGE)

    @property
    def level(self) -> str:
        """Reporting level: notice, warning or error."""
        if self.is_failure:
            return "error"
        if self is Outcome.WARN_MISSING_COVERAGE:
            return "warning"
        return "notice"


@dataclass
class CoverageResult:
    """Covered flag per identifier, in extraction order."""
    coverage: Dict[str, bool] = field(default_factory=dict)
    evidence: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        """데이터 검증"""
        stray = set(self.evidence) - {k for k, v in self.coverage.items() if v}
        if stray:
            raise ValueError(f"Evidence given for uncovered identifiers: {sorted(stray)}")

    @property
    def identifiers(self) -> List[str]:
        return list(self.coverage)

    @property
    def covered(self) -> List[str]:
        return [ac_id for ac_id, ok in self.coverage.items() if ok]

    @property
    def missing(self) -> List[str]:
        return [ac_id for ac_id, ok in self.coverage.items() if not ok]

    @property
    def all_covered(self) -> bool:
        return all(self.coverage.values())

    def is_covered(self, identifier: str) -> bool:
        return self.coverage[identifier]

    def evidence_for(self, identifier: str) -> Optional[str]:
        """First changed path that covers the identifier, if any."""
        return self.evidence.get(identifier)


@dataclass
class Decision:
    """Decision engine output: outcome plus everything needed to report it."""
    outcome: Outcome
    identifiers: List[str]
    missing: List[str]
    message: str
    report: str
    coverage: Optional[CoverageResult] = None

    def __post_init__(self):
        """데이터 검증"""
        missing_variants = {Outcome.WARN_MISSING_COVERAGE, Outcome.FAIL_MISSING_COVERAGE}
        if self.missing and self.outcome not in missing_variants:
            raise ValueError(f"Outcome {self.outcome.value} cannot carry missing identifiers")

    @property
    def level(self) -> str:
        return self.outcome.level

    @property
    def exit_code(self) -> int:
        return 1 if self.outcome.is_failure else 0
