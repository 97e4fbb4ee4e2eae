"""Tests for the hosting API tag clients and tag source selection."""

from unittest.mock import patch, MagicMock

import pytest

from repository.git_tags import GitTagFetcher, TagFetchError
from repository.github import GitHubClient
from repository.gitlab import GitLabClient
from repository.providers import ApiTagFetcher, RepoRef, build_tag_fetcher, normalize_repo_url


class TestNormalizeRepoUrl:
    """Test normalize_repo_url."""

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://github.com/apple/swift-nio.git", RepoRef("github.com", "apple", "swift-nio")),
            ("https://GitHub.com/apple/swift-nio/", RepoRef("github.com", "apple", "swift-nio")),
            ("git@github.com:apple/swift-nio.git", RepoRef("github.com", "apple", "swift-nio")),
            ("https://gitlab.com/group/sub/lib", RepoRef("gitlab.com", "group/sub", "lib")),
            ("ssh://git@gitlab.com/group/lib.git", RepoRef("gitlab.com", "group", "lib")),
        ],
    )
    def test_valid_urls(self, url, expected):
        """Supported URL shapes split into host, owner and repo."""
        assert normalize_repo_url(url) == expected

    @pytest.mark.parametrize("url", ["", "https://github.com/", "https://github.com/onlyowner", "not a url"])
    def test_invalid_urls(self, url):
        """URLs without an owner/repo path are rejected."""
        assert normalize_repo_url(url) is None


class TestGitHubClient:
    """Test GitHubClient tag listing."""

    @patch('repository.github.get_json')
    def test_single_page(self, mock_get_json):
        """A short page ends pagination."""
        mock_get_json.return_value = (200, {}, [{"name": "1.0.0"}, {"name": "1.1.0"}])

        names = GitHubClient(base_url="https://api.example.com", token="t").get_tag_names("acme", "lib")

        assert names == ["1.0.0", "1.1.0"]
        url = mock_get_json.call_args[0][0]
        assert url.startswith("https://api.example.com/repos/acme/lib/tags?")
        assert mock_get_json.call_args[1]["headers"]["Authorization"] == "Bearer t"

    @patch('repository.github.Constants.REPO_API_PER_PAGE', 2)
    @patch('repository.github.get_json')
    def test_follows_pages(self, mock_get_json):
        """Full pages trigger a request for the next page."""
        mock_get_json.side_effect = [
            (200, {}, [{"name": "1.0.0"}, {"name": "1.1.0"}]),
            (200, {}, [{"name": "2.0.0"}]),
        ]

        names = GitHubClient(token="").get_tag_names("acme", "lib")

        assert names == ["1.0.0", "1.1.0", "2.0.0"]
        assert "page=2" in mock_get_json.call_args_list[1][0][0]

    @patch('repository.github.get_json')
    def test_error_status_raises(self, mock_get_json):
        """Non-200 responses raise TagFetchError."""
        mock_get_json.return_value = (404, {}, None)

        with pytest.raises(TagFetchError):
            GitHubClient().get_tag_names("acme", "missing")


class TestGitLabClient:
    """Test GitLabClient tag listing."""

    @patch('repository.gitlab.get_json')
    def test_pagination_by_header(self, mock_get_json):
        """x-total-pages drives pagination and the project path is encoded."""
        mock_get_json.side_effect = [
            (200, {"x-total-pages": "2"}, [{"name": "v1.0.0"}]),
            (200, {"x-total-pages": "2"}, [{"name": "v1.1.0"}]),
        ]

        names = GitLabClient(token="secret").get_tag_names("group/sub", "lib")

        assert names == ["v1.0.0", "v1.1.0"]
        first_url = mock_get_json.call_args_list[0][0][0]
        assert "/projects/group%2Fsub%2Flib/repository/tags" in first_url
        assert mock_get_json.call_args_list[0][1]["headers"]["Private-Token"] == "secret"

    @patch('repository.gitlab.get_json')
    def test_error_status_raises(self, mock_get_json):
        """A failed request (status 0) raises TagFetchError."""
        mock_get_json.return_value = (0, {}, None)

        with pytest.raises(TagFetchError):
            GitLabClient().get_tag_names("group", "lib")

    @patch('repository.gitlab.get_json')
    def test_pagination_by_next_page(self, mock_get_json):
        """Without x-total-pages the x-next-page header is followed."""
        mock_get_json.side_effect = [
            (200, {"X-Next-Page": "2"}, [{"name": "1.0.0"}]),
            (200, {"X-Next-Page": ""}, [{"name": "1.1.0"}]),
        ]

        names = GitLabClient().get_tag_names("group", "lib")

        assert names == ["1.0.0", "1.1.0"]
        assert mock_get_json.call_count == 2
        assert "page=2" in mock_get_json.call_args_list[1][0][0]

    @patch('repository.gitlab.Constants.REPO_API_PER_PAGE', 2)
    @patch('repository.gitlab.get_json')
    def test_pagination_without_headers(self, mock_get_json):
        """Without pagination headers full pages trigger another request."""
        mock_get_json.side_effect = [
            (200, {}, [{"name": "1.0.0"}, {"name": "1.1.0"}]),
            (200, {}, [{"name": "1.2.0"}]),
        ]

        names = GitLabClient().get_tag_names("group", "lib")

        assert names == ["1.0.0", "1.1.0", "1.2.0"]
        assert mock_get_json.call_count == 2


class TestApiTagFetcher:
    """Test host routing in ApiTagFetcher."""

    def _fetcher(self):
        github = MagicMock()
        gitlab = MagicMock()
        fallback = MagicMock()
        github.get_tag_names.return_value = ["gh"]
        gitlab.get_tag_names.return_value = ["gl"]
        fallback.fetch_tags.return_value = ["git"]
        return ApiTagFetcher(github=github, gitlab=gitlab, fallback=fallback), github, gitlab, fallback

    def test_routes_github(self):
        """GitHub URLs use the GitHub client."""
        fetcher, github, _, _ = self._fetcher()
        assert fetcher.fetch_tags("https://github.com/apple/swift-nio.git") == ["gh"]
        github.get_tag_names.assert_called_once_with("apple", "swift-nio")

    def test_routes_gitlab(self):
        """GitLab URLs use the GitLab client."""
        fetcher, _, gitlab, _ = self._fetcher()
        assert fetcher.fetch_tags("git@gitlab.com:group/lib.git") == ["gl"]
        gitlab.get_tag_names.assert_called_once_with("group", "lib")

    def test_other_hosts_fall_back_to_git(self):
        """Self-hosted repositories are listed with git."""
        fetcher, github, gitlab, fallback = self._fetcher()
        assert fetcher.fetch_tags("https://git.example.com/team/lib") == ["git"]
        fallback.fetch_tags.assert_called_once_with("https://git.example.com/team/lib")
        github.get_tag_names.assert_not_called()
        gitlab.get_tag_names.assert_not_called()


class TestBuildTagFetcher:
    """Test build_tag_fetcher."""

    def test_git_default(self):
        """The git source yields a GitTagFetcher."""
        assert isinstance(build_tag_fetcher("git"), GitTagFetcher)

    def test_api(self):
        """The api source yields an ApiTagFetcher."""
        assert isinstance(build_tag_fetcher("api"), ApiTagFetcher)
