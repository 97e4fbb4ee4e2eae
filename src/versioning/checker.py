"""Concurrent lookup of the latest released version of each dependency."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional

from constants import Constants
from common.logging_utils import Timer, extra_context, is_debug_enabled, safe_url
from dependency import Dependency
from repository.git_tags import TagFetcher

from .models import SemanticVersion
from .parser import parse_versions

logger = logging.getLogger(__name__)


def find_latest_version(tags: Iterable[str]) -> Optional[SemanticVersion]:
    """Return the highest release version among tag names.

    Tags that do not parse and prerelease tags are ignored.
    """
    releases = [v for v in parse_versions(tags) if not v.is_prerelease]
    return max(releases) if releases else None


class VersionChecker:
    """Resolves ``latest_version`` for dependencies with a bounded worker pool.

    Branch-pinned dependencies are passed through untouched. A failing tag
    lookup leaves that one dependency without a latest version and never
    affects the others.
    """

    def __init__(self, tag_fetcher: TagFetcher, max_concurrency: Optional[int] = None):
        self.tag_fetcher = tag_fetcher
        self.max_concurrency = max(1, max_concurrency or Constants.MAX_CONCURRENCY)

    def check_for_updates(self, dependencies: Iterable[Dependency]) -> List[Dependency]:
        """Return all dependencies, enriched where possible, sorted by name.

        Args:
            dependencies: Dependencies built from the lock file.

        Returns:
            The same dependencies ordered by case-insensitive name.
        """
        records = list(dependencies)
        pending = [i for i, d in enumerate(records) if d.branch is None]

        if pending:
            workers = min(self.max_concurrency, len(pending))
            with Timer() as t:
                with ThreadPoolExecutor(max_workers=workers) as ex:
                    # map yields in submission order, not completion order
                    lookups = ex.map(self._check_one, [records[i] for i in pending])
                    for index, result in zip(pending, lookups):
                        records[index] = result
            if is_debug_enabled(logger):
                logger.debug(
                    "Checked dependencies",
                    extra=extra_context(
                        event="check_complete",
                        component="checker",
                        count=len(pending),
                        workers=workers,
                        duration_ms=t.duration_ms(),
                    ),
                )

        # Stable sort: names equal ignoring case keep their input order
        return sorted(records, key=lambda d: d.name.lower())

    def _check_one(self, dependency: Dependency) -> Dependency:
        try:
            tags = self.tag_fetcher.fetch_tags(dependency.repository_url)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.debug(
                "Tag lookup failed for %s (%s): %s",
                dependency.name,
                safe_url(dependency.repository_url),
                exc,
            )
            return dependency
        return dependency.with_latest_version(find_latest_version(tags))
