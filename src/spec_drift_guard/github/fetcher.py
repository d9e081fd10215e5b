"""
Change Set Fetcher

Collects every file changed by a pull request from the paginated
files endpoint and converts the records into a ChangeSet.
"""

import logging
from typing import Dict, List

from ..models.change_set import ChangeSet, ChangedFile
from .client import GitHubClient, RetrievalError


logger = logging.getLogger(__name__)


DEFAULT_PAGE_SIZE = 100


class ChangeSetFetcher:
    """
    Pages through the files endpoint until a short page arrives.

    A full page always triggers one more request, so a final page of
    exactly page_size entries is followed by an empty one. Errors
    abort the whole fetch; a partial change set is never returned.
    """

    def __init__(self, client: GitHubClient, page_size: int = DEFAULT_PAGE_SIZE):
        """
        Initialize change set fetcher.

        Args:
            client: Remote listing service
            page_size: Entries requested per page
        """
        if page_size <= 0:
            raise ValueError("Page size must be positive")
        self.client = client
        self.page_size = page_size

    def fetch(self, owner: str, repo: str, pr_number: int) -> ChangeSet:
        """
        Retrieve the complete change set of a pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            pr_number: Pull request number

        Returns:
            ChangeSet with every changed file

        Raises:
            RetrievalError: If any page fails or holds a malformed record
        """
        logger.info(f"Fetching changed files for {owner}/{repo}#{pr_number}")

        files: List[ChangedFile] = []
        page = 1

        while True:
            batch = self.client.list_pull_request_files(owner, repo, pr_number, page, self.page_size)
            files.extend(self._parse_file(record) for record in batch)

            if len(batch) < self.page_size:
                break

            page += 1

        change_set = ChangeSet(files=files)
        logger.info(
            f"Found {len(change_set)} changed files in {page} page(s), "
            f"{len(change_set.files_without_patch)} without patch"
        )
        return change_set

    def _parse_file(self, record: Dict) -> ChangedFile:
        """
        Convert one raw file record.

        Args:
            record: File record from the GitHub API

        Returns:
            ChangedFile with path, patch and status
        """
        if not isinstance(record, dict) or not record.get('filename'):
            raise RetrievalError(f"Malformed file record: {record!r}")

        patch = record.get('patch')
        return ChangedFile(
            path=record['filename'],
            patch=patch if isinstance(patch, str) else None,
            status=record.get('status', 'modified'),
        )
