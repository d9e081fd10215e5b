"""
Data Models

Spec Drift Guard의 핵심 데이터 모델들
"""

from .change_set import ChangedFile, ChangeSet
from .outcome import Outcome, CoverageResult, Decision
from .event import PullRequestInfo, PullRequestEvent, RepositoryCoordinates

__all__ = [
    "ChangedFile",
    "ChangeSet",
    "Outcome",
    "CoverageResult",
    "Decision",
    "PullRequestInfo",
    "PullRequestEvent",
    "RepositoryCoordinates",
]
