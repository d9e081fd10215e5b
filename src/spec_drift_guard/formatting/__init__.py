"""
Report Formatting

This module provides the markdown job summary and the GitHub Actions
workflow-command reporter.
"""

from .summary import SummaryFormatter
from .actions import ActionsReporter

__all__ = ['SummaryFormatter', 'ActionsReporter']
