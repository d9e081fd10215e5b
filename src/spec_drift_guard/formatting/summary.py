"""
Summary Formatter

Renders gate decisions as GitHub-flavored markdown for the job summary.
"""

from typing import List, Optional

from ..models.outcome import CoverageResult


class SummaryFormatter:
    """
    Formats the human-readable report shown in the CI summary panel.
    """

    title = "Spec Drift Guard"
    all_covered_line = "All AC IDs appear in PR file diffs or filenames."
    remediation_line = "Add the AC IDs to code, tests, or analytics changes."

    def __init__(self, include_table: bool = True):
        """
        Initialize summary formatter.

        Args:
            include_table: Render the per-identifier coverage table
        """
        self.include_table = include_table

    def _header(self) -> List[str]:
        return [f"## {self.title}", ""]

    def format_no_identifiers(self, message: str) -> str:
        return "\n".join(self._header() + [message]) + "\n"

    def format_coverage(self, identifiers: List[str], coverage: CoverageResult) -> str:
        """
        Format coverage findings.

        Args:
            identifiers: Identifiers found in the PR description
            coverage: Matcher output for those identifiers

        Returns:
            Markdown report
        """
        lines = self._header()
        lines.append(f"AC IDs found: {', '.join(identifiers)}")
        lines.append("")

        if self.include_table:
            lines.extend(self._coverage_table(identifiers, coverage))
            lines.append("")

        missing = coverage.missing
        if missing:
            lines.append(f"Missing coverage: {', '.join(missing)}")
            lines.append(self.remediation_line)
        else:
            lines.append(self.all_covered_line)

        return "\n".join(lines) + "\n"

    def format_error(self, message: str) -> str:
        return "\n".join(self._header() + [f"Error: {message}"]) + "\n"

    def _coverage_table(self, identifiers: List[str], coverage: CoverageResult) -> List[str]:
        rows = ["| AC ID | Status | Evidence |", "| --- | --- | --- |"]
        for identifier in identifiers:
            covered = coverage.is_covered(identifier)
            evidence = self._code(coverage.evidence_for(identifier))
            status = "covered" if covered else "missing"
            rows.append(f"| {self._escape(identifier)} | {status} | {evidence} |")
        return rows

    @staticmethod
    def _escape(text: str) -> str:
        return text.replace("|", "\\|")

    def _code(self, path: Optional[str]) -> str:
        if not path:
            return ""
        return f"`{self._escape(path)}`"
