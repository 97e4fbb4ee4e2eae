"""Tag source selection and repository URL normalization."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urlsplit

from constants import Constants, TagSources
from common.logging_utils import safe_url

from .git_tags import GitTagFetcher, TagFetcher
from .github import GitHubClient
from .gitlab import GitLabClient

logger = logging.getLogger(__name__)

_SCP_LIKE = re.compile(r"^[\w.-]+@([\w.-]+):(.+)$")

GITHUB_HOST = "github.com"
GITLAB_HOST = "gitlab.com"


@dataclass(frozen=True)
class RepoRef:
    """Host plus owner/name of a hosted repository."""
    host: str
    owner: str
    repo: str


def normalize_repo_url(url: str) -> Optional[RepoRef]:
    """Split an https or scp-style git URL into host, owner and repo.

    Returns None when the URL has no ``owner/repo`` path.
    """
    if not url:
        return None
    text = url.strip()
    scp = _SCP_LIKE.match(text)
    if scp and "://" not in text:
        host, path = scp.group(1), scp.group(2)
    else:
        try:
            parts = urlsplit(text)
        except ValueError:
            return None
        host, path = parts.hostname or "", parts.path

    path = path.strip("/")
    if path.lower().endswith(".git"):
        path = path[:-4]
    segments = [s for s in path.split("/") if s]
    if not host or len(segments) < 2:
        return None
    return RepoRef(host=host.lower(), owner="/".join(segments[:-1]), repo=segments[-1])


class ApiTagFetcher:
    """Lists tags through the GitHub or GitLab REST API.

    Repositories on other hosts, or URLs that cannot be normalized, are
    delegated to the git fetcher.
    """

    def __init__(
        self,
        github: Optional[GitHubClient] = None,
        gitlab: Optional[GitLabClient] = None,
        fallback: Optional[TagFetcher] = None,
    ):
        self.github = github or GitHubClient()
        self.gitlab = gitlab or GitLabClient()
        self.fallback = fallback or GitTagFetcher()

    def fetch_tags(self, repository_url: str) -> List[str]:
        ref = normalize_repo_url(repository_url)
        if ref is not None and ref.host == GITHUB_HOST:
            return self.github.get_tag_names(ref.owner, ref.repo)
        if ref is not None and ref.host == GITLAB_HOST:
            return self.gitlab.get_tag_names(ref.owner, ref.repo)
        logger.debug("No API client for %s, using git", safe_url(repository_url))
        return self.fallback.fetch_tags(repository_url)


def build_tag_fetcher(source: Optional[str] = None) -> TagFetcher:
    """Create the tag fetcher for a configured tag source name."""
    name = source or Constants.TAG_SOURCE
    if name == TagSources.API.value:
        return ApiTagFetcher()
    return GitTagFetcher()
