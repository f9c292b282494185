"""Resolve the templates location to a local directory.

GitHub references are shallow-cloned once into a temporary directory:

    https://github.com/<owner>/<repo>
    https://github.com/<owner>/<repo>/tree/<branch>/<dir>
"""

from __future__ import annotations

import logging
import re
import subprocess
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from gencoder.errors import TemplateSourceError

logger = logging.getLogger(__name__)

_GITHUB_RE = re.compile(
    r"github\.com/(?P<owner>[^/]+)/(?P<repo>[^/]+?)(?:\.git)?(?:/tree/(?P<branch>[^/]+)(?:/(?P<dir>.*))?)?/?$"
)

CLONE_TIMEOUT = 600


@dataclass
class RemoteSource:
    owner: str
    repo: str
    branch: str = "main"
    subdir: str = ""

    @property
    def clone_url(self) -> str:
        return f"https://github.com/{self.owner}/{self.repo}.git"


def parse_remote(location: str) -> RemoteSource | None:
    """Parse a GitHub reference; None for anything else (a local path)."""
    if "github.com/" not in location:
        return None
    m = _GITHUB_RE.search(location)
    if not m:
        raise TemplateSourceError(f"Invalid GitHub URL format: {location}")
    return RemoteSource(
        owner=m.group("owner"),
        repo=m.group("repo"),
        branch=m.group("branch") or "main",
        subdir=(m.group("dir") or "").strip("/"),
    )


@contextmanager
def resolve_template_source(location: str) -> Iterator[Path]:
    """Yield a local directory holding the templates for ``location``."""
    remote = parse_remote(location)
    if remote is None:
        yield Path(location)
        return

    with tempfile.TemporaryDirectory(prefix="gencoder-templates-") as tmp:
        clone_remote(remote, Path(tmp))
        yield Path(tmp) / remote.subdir if remote.subdir else Path(tmp)


def clone_remote(remote: RemoteSource, target: Path) -> None:
    logger.info("cloning %s (branch %s)", remote.clone_url, remote.branch)
    try:
        result = subprocess.run(
            ["git", "clone", "--branch", remote.branch, "--depth", "1",
             remote.clone_url, str(target)],
            capture_output=True,
            text=True,
            timeout=CLONE_TIMEOUT,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        raise TemplateSourceError(f"Failed to clone {remote.clone_url}: {e}") from e

    if result.returncode != 0:
        raise TemplateSourceError(
            f"Failed to clone {remote.clone_url}: {result.stderr.strip()}"
        )
