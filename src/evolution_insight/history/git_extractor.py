"""Extract revision records from a git repository via subprocess.

This is an input collaborator: it turns ``git log --numstat`` output into
Revision records. Line counts are taken from git as-is; nothing is diffed
here. Renames are not followed (``--no-renames``), so a renamed file shows
up as a delete of the old path and an add of the new one.
"""

from __future__ import annotations

import re
import subprocess
from pathlib import Path
from typing import Callable, Optional

from ..exceptions import InvalidInputError
from ..logging_config import get_logger
from .models import FileChange, Revision

logger = get_logger(__name__)


class GitExtractor:
    """Parse git log into Revision records."""

    def __init__(self, repo_path: str, max_commits: int = 0):
        self.repo_path = str(Path(repo_path).resolve())
        self.max_commits = max_commits

    def extract(self, on_revision: Optional[Callable[[], None]] = None) -> list[Revision]:
        """Run git log and parse it.

        Args:
            on_revision: Called once per parsed revision, for progress display.

        Raises:
            InvalidInputError: If the path is not a git repository or git fails.
        """
        if not self._is_git_repo():
            raise InvalidInputError(self.repo_path, "not a git repository")

        raw = self._run_git_log()
        revisions = self.parse_log(raw, on_revision)
        logger.info(f"Extracted {len(revisions)} revisions from {self.repo_path}")
        return revisions

    def _is_git_repo(self) -> bool:
        try:
            result = subprocess.run(
                ["git", "-C", self.repo_path, "rev-parse", "--git-dir"],
                capture_output=True,
                text=True,
                timeout=5,
            )
            return result.returncode == 0
        except (FileNotFoundError, subprocess.TimeoutExpired):
            return False

    def _run_git_log(self) -> str:
        cmd = [
            "git",
            "-C",
            self.repo_path,
            "log",
            "--format=%H|%at|%ae|%s",
            "--numstat",
            "--no-renames",
        ]
        if self.max_commits > 0:
            cmd.append(f"-n{self.max_commits}")
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, errors="replace")
        except FileNotFoundError as e:
            raise InvalidInputError(self.repo_path, f"git not available: {e}") from e
        if result.returncode != 0:
            raise InvalidInputError(self.repo_path, f"git log failed: {result.stderr.strip()}")
        return result.stdout

    # Matches: 40-char (SHA-1) or 64-char (SHA-256) hex hash | unix timestamp | author email | subject
    # Subject can contain | characters, so we use maxsplit=3 during parsing
    _HEADER_RE = re.compile(r"^[0-9a-f]{40,64}\|\d+\|[^|]*\|.*$")
    # Matches: added <TAB> deleted <TAB> path, counts are "-" for binary files
    _NUMSTAT_RE = re.compile(r"^(\d+|-)\t(\d+|-)\t(.+)$")

    @classmethod
    def parse_log(
        cls, raw: str, on_revision: Optional[Callable[[], None]] = None
    ) -> list[Revision]:
        """Parse ``git log --format=%H|%at|%ae|%s --numstat`` output.

        Commits without file changes (merges) are skipped. Binary files are
        recorded with zero added and deleted lines.
        """
        revisions: list[Revision] = []
        header: Optional[list[str]] = None
        changes: list[FileChange] = []

        def flush() -> None:
            if header is not None and changes:
                revisions.append(
                    Revision(
                        rev_id=header[0],
                        author=header[2],
                        timestamp=int(header[1]),
                        changes=tuple(changes),
                        message=header[3] if len(header) > 3 else "",
                    )
                )
                if on_revision is not None:
                    on_revision()

        for line in raw.split("\n"):
            line = line.rstrip("\r")
            if not line.strip():
                continue

            if cls._HEADER_RE.match(line):
                flush()
                header = line.split("|", 3)
                changes = []
                continue

            match = cls._NUMSTAT_RE.match(line)
            if match and header is not None:
                added, deleted, path = match.groups()
                changes.append(
                    FileChange(
                        path=path,
                        added=0 if added == "-" else int(added),
                        deleted=0 if deleted == "-" else int(deleted),
                    )
                )

        flush()
        return revisions
