"""
Coverage Engine

This module provides identifier extraction, diff coverage matching,
and the gate decision policy.
"""

from .extractor import IdentifierExtractor, extract_identifiers
from .matcher import CoverageMatcher
from .decision import DecisionEngine

__all__ = ['IdentifierExtractor', 'extract_identifiers', 'CoverageMatcher', 'DecisionEngine']
