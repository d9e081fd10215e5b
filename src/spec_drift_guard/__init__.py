"""
Spec Drift Guard

Pull request gate that checks acceptance-criteria IDs from the PR
description are referenced by the changed files.
"""

__version__ = "1.0.0"

from .api import SpecDriftGuard, GuardResult

__all__ = ["SpecDriftGuard", "GuardResult"]
