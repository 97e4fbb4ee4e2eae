"""GitHub API client for repository tags."""
from __future__ import annotations

import os
from typing import Dict, List, Optional

from constants import Constants
from common.http_client import get_json

from .git_tags import TagFetchError


class GitHubClient:
    """Lightweight REST client listing GitHub tags.

    Supports optional authentication via GITHUB_TOKEN environment variable;
    unauthenticated requests are subject to GitHub's low rate limit.
    """

    def __init__(self, base_url: Optional[str] = None, token: Optional[str] = None):
        self.base_url = (base_url or Constants.GITHUB_API_BASE).rstrip("/")
        self.token = token or os.environ.get(Constants.ENV_GITHUB_TOKEN)

    def _get_headers(self) -> Dict[str, str]:
        headers = {'Accept': 'application/vnd.github+json'}
        if self.token:
            headers['Authorization'] = f"Bearer {self.token}"
        return headers

    def get_tag_names(self, owner: str, repo: str) -> List[str]:
        """Fetch all tag names of a repository.

        Pages are requested until one comes back shorter than the page size.

        Raises:
            TagFetchError: Any page could not be fetched.
        """
        url = f"{self.base_url}/repos/{owner}/{repo}/tags"
        per_page = Constants.REPO_API_PER_PAGE
        names: List[str] = []
        page = 1

        while True:
            page_url = f"{url}?per_page={per_page}&page={page}"
            status, _, data = get_json(page_url, headers=self._get_headers())
            if status != 200 or not isinstance(data, list):
                raise TagFetchError(url, f"HTTP {status}")

            names.extend(t['name'] for t in data if isinstance(t, dict) and t.get('name'))
            if len(data) < per_page:
                break
            page += 1

        return names
