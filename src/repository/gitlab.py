"""GitLab API client for repository tags.

Provides a lightweight REST client listing the tags of a GitLab project,
used as an alternative to ``git ls-remote`` when the API is preferred.
"""
from __future__ import annotations

import os
from typing import Dict, List, Optional
from urllib.parse import quote

from constants import Constants
from common.http_client import get_json

from .git_tags import TagFetchError


class GitLabClient:
    """Lightweight REST client for GitLab API operations.

    Supports optional authentication via GITLAB_TOKEN environment variable.
    """

    def __init__(self, base_url: Optional[str] = None, token: Optional[str] = None):
        """Initialize GitLab client.

        Args:
            base_url: Base URL for GitLab API (defaults to Constants.GITLAB_API_BASE)
            token: GitLab personal access token (defaults to GITLAB_TOKEN env var)
        """
        self.base_url = (base_url or Constants.GITLAB_API_BASE).rstrip("/")
        self.token = token or os.environ.get(Constants.ENV_GITLAB_TOKEN)

    def _get_headers(self) -> Dict[str, str]:
        """Get request headers including authorization if token is available."""
        headers = {}
        if self.token:
            headers['Private-Token'] = self.token
        return headers

    def get_tag_names(self, owner: str, repo: str) -> List[str]:
        """Fetch all tag names of a project, following pagination.

        Args:
            owner: Project owner/namespace
            repo: Project name

        Returns:
            List of tag names

        Raises:
            TagFetchError: Any page could not be fetched.
        """
        project_path = quote(f"{owner}/{repo}", safe='')
        url = f"{self.base_url}/projects/{project_path}/repository/tags"
        names: List[str] = []
        page = 1

        while True:
            page_url = f"{url}?per_page={Constants.REPO_API_PER_PAGE}&page={page}"
            status, headers, data = get_json(page_url, headers=self._get_headers())
            if status != 200 or not isinstance(data, list):
                raise TagFetchError(url, f"HTTP {status}")

            names.extend(t['name'] for t in data if isinstance(t, dict) and t.get('name'))

            next_page = self._get_next_page(headers, page, len(data))
            if next_page is None:
                break
            page = next_page

        return names

    def _get_next_page(self, headers: Dict[str, str], page: int, count: int) -> Optional[int]:
        """Return the page to request after page, or None when done.

        GitLab omits x-total-pages for large collections; x-next-page is used
        then, and without either header paging continues while pages are full.
        """
        total_pages = self._get_total_pages(headers)
        if total_pages is not None:
            return page + 1 if page < total_pages else None
        next_str = next((v for k, v in headers.items() if k.lower() == 'x-next-page'), None)
        if next_str is not None:
            try:
                return int(next_str) if next_str.strip() else None
            except ValueError:
                pass
        return page + 1 if count >= Constants.REPO_API_PER_PAGE else None

    def _get_total_pages(self, headers: Dict[str, str]) -> Optional[int]:
        """Extract total pages from response headers.

        Args:
            headers: Response headers

        Returns:
            Total pages or None
        """
        total_str = headers.get('x-total-pages') or headers.get('X-Total-Pages')
        if total_str:
            try:
                return int(total_str)
            except ValueError:
                pass
        return None
