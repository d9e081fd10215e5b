"""
Identifier Extractor

Extracts acceptance-criteria identifiers from pull request descriptions.
"""

import re
import logging
from typing import List, Optional

from ..config import ConfigurationError, DEFAULT_AC_PATTERN


logger = logging.getLogger(__name__)


class IdentifierExtractor:
    """
    Scans free text for identifiers matching a configurable pattern.

    The whole match is the identifier, even when the pattern has groups.
    Results are unique and keep the order of first appearance.
    """

    def __init__(self, pattern: str = DEFAULT_AC_PATTERN):
        """
        Initialize identifier extractor.

        Args:
            pattern: Regular expression source for one identifier

        Raises:
            ConfigurationError: If the pattern does not compile or
                matches the empty string
        """
        try:
            self.pattern = re.compile(pattern, re.ASCII)
        except re.error as e:
            raise ConfigurationError(f"Invalid AC pattern {pattern!r}: {e}") from e

        if self.pattern.fullmatch("") is not None:
            raise ConfigurationError(f"AC pattern {pattern!r} matches the empty string")

    def extract(self, text: Optional[str]) -> List[str]:
        """
        Extract unique identifiers from text.

        Args:
            text: PR description, possibly empty or None

        Returns:
            Identifiers in order of first occurrence
        """
        if not text:
            return []

        seen = {}
        for match in self.pattern.finditer(text):
            token = match.group(0)
            if not token:
                raise ConfigurationError(
                    f"AC pattern {self.pattern.pattern!r} produced an empty match at offset {match.start()}"
                )
            seen.setdefault(token, None)

        identifiers = list(seen)
        logger.debug(f"Extracted {len(identifiers)} identifiers: {identifiers}")
        return identifiers


def extract_identifiers(text: Optional[str], pattern: str = DEFAULT_AC_PATTERN) -> List[str]:
    """Shortcut for IdentifierExtractor(pattern).extract(text)."""
    return IdentifierExtractor(pattern).extract(text)
