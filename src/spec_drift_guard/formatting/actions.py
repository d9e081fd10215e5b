"""
GitHub Actions Reporter

Emits workflow commands (::notice::, ::warning::, ::error::) and
appends markdown to the job step summary.
"""

import sys
import logging
from pathlib import Path
from typing import Optional, TextIO

from ..models.outcome import Decision


logger = logging.getLogger(__name__)


LEVELS = ('notice', 'warning', 'error')


def escape_data(message: str) -> str:
    """Escape workflow command data so multi-line messages survive."""
    return message.replace('%', '%25').replace('\r', '%0D').replace('\n', '%0A')


class ActionsReporter:
    """
    Reporting sink for GitHub Actions runners.

    Log lines go to stdout as workflow commands; the markdown report
    is appended to the file named by GITHUB_STEP_SUMMARY.
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        summary_path: Optional[str] = None,
        emit_summary: bool = True
    ):
        """
        Initialize actions reporter.

        Args:
            stream: Where workflow commands are written (default: stdout)
            summary_path: Step summary file; None disables summaries
            emit_summary: Whether reports are written at all
        """
        self.stream = stream if stream is not None else sys.stdout
        self.summary_path = summary_path
        self.emit_summary = emit_summary

    def log(self, level: str, message: str) -> None:
        if level not in LEVELS:
            raise ValueError(f"Invalid level: {level}")
        self.stream.write(f"::{level}::{escape_data(message)}\n")
        self.stream.flush()

    def notice(self, message: str) -> None:
        self.log('notice', message)

    def warning(self, message: str) -> None:
        self.log('warning', message)

    def error(self, message: str) -> None:
        self.log('error', message)

    def write_summary(self, text: str) -> bool:
        """
        Append markdown to the step summary.

        Returns:
            True if something was written
        """
        if not self.emit_summary or not self.summary_path:
            logger.debug("Step summary disabled, skipping")
            return False

        with open(Path(self.summary_path), 'a', encoding='utf-8') as f:
            f.write(text)
            if not text.endswith('\n'):
                f.write('\n')
        return True

    def report(self, decision: Decision) -> None:
        """Write the decision's report and its log line at the decision's level."""
        self.write_summary(decision.report)
        self.log(decision.level, decision.message)
