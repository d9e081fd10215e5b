"""
GitHub Integration Layer

This module provides GitHub API integration for paginated changed-file
retrieval and workflow event loading.
"""

from .client import GitHubClient, RetrievalError, RateLimitExceeded
from .fetcher import ChangeSetFetcher
from .event import load_pull_request

__all__ = ['GitHubClient', 'RetrievalError', 'RateLimitExceeded', 'ChangeSetFetcher', 'load_pull_request']
