"""
Integration tests for the GitHub API client and change set fetcher.

These tests exercise the client against mocked HTTP responses.
"""

import pytest
from unittest.mock import Mock, patch
from datetime import datetime

import requests

from spec_drift_guard.github.client import GitHubClient, RetrievalError, RateLimitExceeded
from spec_drift_guard.github.fetcher import ChangeSetFetcher


def make_response(status_code=200, payload=None, text=None, headers=None):
    response = Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.headers = headers or {}
    response.json.return_value = payload if payload is not None else []
    response.text = text if text is not None else ""
    response.content = b"[]" if payload is not None or text is None else text.encode()
    return response


def file_records(count, prefix='f'):
    return [{'filename': f'src/{prefix}{i}.py', 'status': 'modified', 'patch': f'+ {i}'} for i in range(count)]


class TestGitHubClient:
    """Test GitHub API client functionality."""

    def setup_method(self):
        """Set up test fixtures."""
        self.client = GitHubClient("test_token")

    def test_session_headers(self):
        headers = self.client.session.headers
        assert headers['Authorization'] == 'Bearer test_token'
        assert headers['Accept'] == 'application/vnd.github+json'
        assert headers['User-Agent'].startswith('spec-drift-guard/')

    def test_base_url_trailing_slash(self):
        client = GitHubClient("t", base_url="https://ghe.example.com/api/v3/")
        assert client.base_url == "https://ghe.example.com/api/v3"

    @patch('requests.Session.request')
    def test_list_files_request(self, mock_request):
        mock_request.return_value = make_response(payload=file_records(2), headers={
            'X-RateLimit-Remaining': '4999',
            'X-RateLimit-Reset': str(int(datetime.now().timestamp()) + 3600),
        })

        files = self.client.list_pull_request_files('octo', 'widgets', 12, page=3, per_page=100)

        assert len(files) == 2
        method, url = mock_request.call_args.args
        assert method == 'GET'
        assert url == 'https://api.github.com/repos/octo/widgets/pulls/12/files'
        assert mock_request.call_args.kwargs['params'] == {'per_page': 100, 'page': 3}
        assert mock_request.call_args.kwargs['timeout'] is None
        assert self.client.rate_limit_remaining == 4999

    @patch('requests.Session.request')
    def test_timeout_passed_through(self, mock_request):
        mock_request.return_value = make_response(payload=[])
        GitHubClient("t", timeout_seconds=15).list_pull_request_files('o', 'r', 1, 1)
        assert mock_request.call_args.kwargs['timeout'] == 15

    @patch('requests.Session.request')
    def test_error_status(self, mock_request):
        mock_request.return_value = make_response(status_code=404, text='{"message": "Not Found"}')

        with pytest.raises(RetrievalError) as exc_info:
            self.client.list_pull_request_files('octo', 'widgets', 12, 1)

        assert exc_info.value.status_code == 404
        assert exc_info.value.body == '{"message": "Not Found"}'
        assert str(exc_info.value) == 'GitHub API error 404: {"message": "Not Found"}'

    @patch('requests.Session.request')
    def test_rate_limit_429(self, mock_request):
        mock_request.return_value = make_response(status_code=429, text='slow down', headers={
            'X-RateLimit-Reset': str(int(datetime.now().timestamp()) + 3600),
        })

        with pytest.raises(RateLimitExceeded) as exc_info:
            self.client.list_pull_request_files('octo', 'widgets', 12, 1)

        assert isinstance(exc_info.value, RetrievalError)
        assert exc_info.value.status_code == 429

    @patch('requests.Session.request')
    def test_malformed_rate_limit_headers_are_ignored(self, mock_request):
        records = file_records(2)
        mock_request.return_value = make_response(payload=records, headers={
            'X-RateLimit-Remaining': 'lots',
            'X-RateLimit-Reset': 'soon',
        })

        assert self.client.list_pull_request_files('octo', 'widgets', 12, 1) == records
        assert self.client.rate_limit_remaining is None
        assert self.client.rate_limit_reset is None

    @patch('requests.Session.request')
    def test_out_of_range_reset_header_is_ignored(self, mock_request):
        mock_request.return_value = make_response(payload=[], headers={
            'X-RateLimit-Remaining': '4999',
            'X-RateLimit-Reset': '1e300',
        })

        assert self.client.list_pull_request_files('octo', 'widgets', 12, 1) == []
        assert self.client.rate_limit_remaining == 4999
        assert self.client.rate_limit_reset is None

    @patch('requests.Session.request')
    def test_rate_limit_429_with_malformed_reset(self, mock_request):
        mock_request.return_value = make_response(status_code=429, text='slow down', headers={
            'X-RateLimit-Reset': 'not-a-number',
        })

        with pytest.raises(RateLimitExceeded) as exc_info:
            self.client.list_pull_request_files('octo', 'widgets', 12, 1)

        assert exc_info.value.reset_time > datetime.now()

    @patch('requests.Session.request')
    def test_rate_limit_403_exhausted(self, mock_request):
        mock_request.return_value = make_response(status_code=403, text='API rate limit exceeded', headers={
            'X-RateLimit-Remaining': '0',
            'X-RateLimit-Reset': str(int(datetime.now().timestamp()) + 60),
        })

        with pytest.raises(RateLimitExceeded):
            self.client.list_pull_request_files('octo', 'widgets', 12, 1)

    @patch('requests.Session.request')
    def test_forbidden_without_rate_limit(self, mock_request):
        mock_request.return_value = make_response(status_code=403, text='Resource not accessible', headers={
            'X-RateLimit-Remaining': '4000',
        })

        with pytest.raises(RetrievalError) as exc_info:
            self.client.list_pull_request_files('octo', 'widgets', 12, 1)

        assert not isinstance(exc_info.value, RateLimitExceeded)

    @patch('requests.Session.request')
    def test_transport_error(self, mock_request):
        mock_request.side_effect = requests.ConnectionError("connection reset")

        with pytest.raises(RetrievalError) as exc_info:
            self.client.list_pull_request_files('octo', 'widgets', 12, 1)

        assert exc_info.value.status_code is None

    @patch('requests.Session.request')
    def test_non_list_payload(self, mock_request):
        mock_request.return_value = make_response(payload={'message': 'unexpected'})

        with pytest.raises(RetrievalError):
            self.client.list_pull_request_files('octo', 'widgets', 12, 1)

    @patch('requests.Session.request')
    def test_invalid_json(self, mock_request):
        response = make_response(text='<html>')
        response.json.side_effect = ValueError("Expecting value")
        mock_request.return_value = response

        with pytest.raises(RetrievalError):
            self.client.list_pull_request_files('octo', 'widgets', 12, 1)


class TestChangeSetFetcherWithClient:
    """Test pagination through the real client with mocked HTTP."""

    @patch('requests.Session.request')
    def test_paginates_until_short_page(self, mock_request):
        mock_request.side_effect = [
            make_response(payload=file_records(100, 'a')),
            make_response(payload=file_records(100, 'b')),
            make_response(payload=file_records(37, 'c')),
        ]

        change_set = ChangeSetFetcher(GitHubClient("t")).fetch('octo', 'widgets', 3)

        assert len(change_set) == 237
        assert mock_request.call_count == 3
        assert [c.kwargs['params']['page'] for c in mock_request.call_args_list] == [1, 2, 3]

    @patch('requests.Session.request')
    def test_full_last_page_triggers_empty_request(self, mock_request):
        mock_request.side_effect = [
            make_response(payload=file_records(100)),
            make_response(payload=[]),
        ]

        change_set = ChangeSetFetcher(GitHubClient("t")).fetch('octo', 'widgets', 3)

        assert len(change_set) == 100
        assert mock_request.call_count == 2

    @patch('requests.Session.request')
    def test_error_on_later_page_returns_nothing(self, mock_request):
        mock_request.side_effect = [
            make_response(payload=file_records(100)),
            make_response(status_code=500, text='Server Error'),
        ]

        with pytest.raises(RetrievalError) as exc_info:
            ChangeSetFetcher(GitHubClient("t")).fetch('octo', 'widgets', 3)

        assert exc_info.value.status_code == 500
