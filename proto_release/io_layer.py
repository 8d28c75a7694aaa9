"""
I/O Layer for Proto Release

This module contains all I/O operations (file system, external tools, Git)
separated from business logic. This is the "imperative shell" that
handles all side effects.
"""

import logging
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from .exceptions import ExternalToolError, GitTagError
from .models import ToolCommand

logger = logging.getLogger(__name__)


class IOLayer:
    """Handles all I/O operations for the application."""

    def __init__(self, root: Path, dry_run: bool = False, verbose: bool = False):
        """Initialize the I/O layer.

        Args:
            root: Project root; external tools run with this working directory
            dry_run: If True, don't perform actual writes or tool invocations
            verbose: If True, echo every external command
        """
        self.root = Path(root)
        self.dry_run = dry_run
        self.verbose = verbose

    # -----------------------------------------------------------------------------
    # File System Operations
    # -----------------------------------------------------------------------------

    def list_files(self, directory: Path, extension: str) -> List[Path]:
        """List files with the given extension directly inside a directory.

        Args:
            directory: Directory to scan (not recursive)
            extension: File extension including the dot, e.g. ".proto"

        Returns:
            Sorted list of matching file paths, empty if the directory doesn't exist
        """
        if not directory.is_dir():
            return []

        return sorted(
            path for path in directory.iterdir()
            if path.is_file() and path.suffix == extension
        )

    def create_directory(self, path: Path) -> Optional[Path]:
        """Create a directory and its parents.

        Succeeds whether or not the directory already exists.

        Args:
            path: Directory to create

        Returns:
            The topmost directory this call created, None if nothing was
            created or dry run
        """
        if self.dry_run:
            logger.info(f"[DRY RUN] Would create directory {path}")
            return None

        topmost = None
        for candidate in (path, *path.parents):
            if candidate.exists():
                break
            topmost = candidate

        path.mkdir(parents=True, exist_ok=True)
        return topmost

    def remove_directory(self, path: Path) -> bool:
        """Remove a directory tree.

        Args:
            path: Directory to remove

        Returns:
            True if removed, False if it didn't exist or dry run
        """
        if self.dry_run:
            logger.info(f"[DRY RUN] Would remove directory {path}")
            return False

        if not path.is_dir():
            return False

        shutil.rmtree(path)
        return True

    # -----------------------------------------------------------------------------
    # External Tools
    # -----------------------------------------------------------------------------

    def run_command(self, command: ToolCommand) -> bool:
        """Run an external tool and wait for it to finish.

        Args:
            command: Tool and arguments to run

        Returns:
            True if executed, False if dry run

        Raises:
            ExternalToolError: If the tool is missing or exits non-zero
        """
        rendered = shlex.join(command.argv)
        if self.dry_run:
            logger.info(f"[DRY RUN] Would run: {rendered}")
            return False

        if self.verbose:
            logger.debug(f"+ {rendered}")

        try:
            completed = subprocess.run(command.argv, cwd=self.root, check=False)
        except FileNotFoundError as e:
            raise ExternalToolError(
                f"{command.tool} not found: {e}", command=command.argv, returncode=127
            ) from e

        if completed.returncode != 0:
            raise ExternalToolError(
                f"{command.tool} exited with status {completed.returncode}: {rendered}",
                command=command.argv,
                returncode=completed.returncode,
            )

        return True

    # -----------------------------------------------------------------------------
    # Git Operations
    # -----------------------------------------------------------------------------

    def resolve_head_tag(self, repo: Optional[Repo] = None) -> str:
        """Return the tag that points exactly at HEAD.

        Args:
            repo: Git repository object, opened from the project root if omitted

        Returns:
            Tag name

        Raises:
            GitTagError: If the root is not a git repository or HEAD is not tagged
        """
        try:
            repo = repo or Repo(self.root, search_parent_directories=True)
            return repo.git.describe("--tags", "--exact-match", "HEAD").strip()
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise GitTagError(f"{self.root} is not a git repository") from e
        except GitCommandError as e:
            raise GitTagError(f"No tag points at HEAD: {e.stderr.strip() if e.stderr else e}") from e
