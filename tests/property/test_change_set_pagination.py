"""
Property-based tests for paginated change set retrieval.

Property: the fetcher collects every page, stops at the first short
page, and never returns a partial change set.
"""

import pytest
from hypothesis import given, strategies as st
from unittest.mock import Mock

from spec_drift_guard.github.client import GitHubClient, RetrievalError
from spec_drift_guard.github.fetcher import ChangeSetFetcher


def make_page(page_number, size):
    return [
        {'filename': f'src/p{page_number}_f{i}.py', 'status': 'modified', 'patch': f'+ line {i}'}
        for i in range(size)
    ]


def fake_client(page_sizes):
    client = Mock(spec=GitHubClient)
    client.list_pull_request_files.side_effect = [
        make_page(n, size) for n, size in enumerate(page_sizes, start=1)
    ]
    return client


class TestChangeSetPagination:
    """Property tests for ChangeSetFetcher."""

    def test_three_pages(self):
        """Pages of 100, 100 and 37 give 237 files and no fourth request."""
        client = fake_client([100, 100, 37])

        change_set = ChangeSetFetcher(client).fetch('octo', 'widgets', 5)

        assert len(change_set) == 237
        assert client.list_pull_request_files.call_count == 3
        pages = [c.args[3] for c in client.list_pull_request_files.call_args_list]
        assert pages == [1, 2, 3]

    def test_exactly_full_last_page(self):
        """A final page of exactly 100 is followed by one empty request."""
        client = fake_client([100, 0])

        change_set = ChangeSetFetcher(client).fetch('octo', 'widgets', 5)

        assert len(change_set) == 100
        assert client.list_pull_request_files.call_count == 2

    def test_requests_use_page_size(self):
        client = fake_client([2, 1])

        change_set = ChangeSetFetcher(client, page_size=2).fetch('octo', 'widgets', 9)

        assert len(change_set) == 3
        client.list_pull_request_files.assert_any_call('octo', 'widgets', 9, 1, 2)
        client.list_pull_request_files.assert_any_call('octo', 'widgets', 9, 2, 2)

    @given(
        full_pages=st.integers(min_value=0, max_value=6),
        last_page=st.integers(min_value=0, max_value=99)
    )
    def test_completeness(self, full_pages, last_page):
        """
        Property: every entry of every page is collected, in order, with
        exactly one request per page.
        """
        sizes = [100] * full_pages + [last_page]
        client = fake_client(sizes)

        change_set = ChangeSetFetcher(client).fetch('octo', 'widgets', 1)

        assert len(change_set) == 100 * full_pages + last_page
        assert client.list_pull_request_files.call_count == full_pages + 1
        expected_paths = [f['filename'] for n, size in enumerate(sizes, start=1) for f in make_page(n, size)]
        assert change_set.paths == expected_paths

    @given(failing_page=st.integers(min_value=1, max_value=4))
    def test_failure_aborts_fetch(self, failing_page):
        """
        Property: an error on any page aborts the fetch with no result.
        """
        pages = [make_page(n, 100) for n in range(1, failing_page)]
        client = Mock(spec=GitHubClient)
        client.list_pull_request_files.side_effect = pages + [
            RetrievalError("GitHub API error 502: Bad Gateway", status_code=502, body="Bad Gateway")
        ]

        with pytest.raises(RetrievalError) as exc_info:
            ChangeSetFetcher(client).fetch('octo', 'widgets', 1)

        assert exc_info.value.status_code == 502
        assert client.list_pull_request_files.call_count == failing_page

    def test_records_without_patch(self):
        client = Mock(spec=GitHubClient)
        client.list_pull_request_files.side_effect = [[
            {'filename': 'img/logo.png', 'status': 'added'},
            {'filename': 'docs/AC-3.md', 'status': 'renamed', 'patch': None},
        ]]

        change_set = ChangeSetFetcher(client).fetch('octo', 'widgets', 1)

        assert [f.patch for f in change_set] == [None, None]
        assert [f.status for f in change_set] == ['added', 'renamed']
        assert len(change_set.files_without_patch) == 2

    def test_malformed_record(self):
        client = Mock(spec=GitHubClient)
        client.list_pull_request_files.side_effect = [[{'status': 'added'}]]

        with pytest.raises(RetrievalError):
            ChangeSetFetcher(client).fetch('octo', 'widgets', 1)

    def test_page_size_must_be_positive(self):
        with pytest.raises(ValueError):
            ChangeSetFetcher(Mock(spec=GitHubClient), page_size=0)
