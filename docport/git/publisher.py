"""Git publishing utilities."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import Callable, Iterable, Sequence

from ..logging import get_logger


class Publisher:
    """Stages and commits the files touched by a docport run."""

    def __init__(self, runner: Callable[..., str] | None = None) -> None:
        self._runner = runner or self._default_runner
        self.logger = get_logger("publisher")

    def commit(
        self,
        repo_path: str | Path,
        files: Sequence[Path | str],
        *,
        message: str = "docs: reference shared XML docs via docport",
    ) -> bool:
        """Stage the provided files and create a commit if changes exist."""
        repo = self._find_repo(Path(repo_path))
        if repo is None or not files:
            return False

        relative_files = [self._to_relative(repo, Path(file)) for file in files]
        self._run(["git", "add", "--", *relative_files], cwd=repo)

        status = self._run(["git", "status", "--porcelain"], cwd=repo, capture_output=True)
        if not status.strip():
            return False

        env = os.environ.copy()
        env.setdefault("GIT_AUTHOR_NAME", "docport")
        env.setdefault("GIT_AUTHOR_EMAIL", "docport@example.com")
        env.setdefault("GIT_COMMITTER_NAME", env["GIT_AUTHOR_NAME"])
        env.setdefault("GIT_COMMITTER_EMAIL", env["GIT_AUTHOR_EMAIL"])

        self._run(["git", "commit", "-m", message], cwd=repo, env=env)
        self.logger.info("Committed %d file(s) in %s", len(relative_files), repo)
        return True

    # ------------------------------------------------------------------
    # Helpers

    @staticmethod
    def _find_repo(path: Path) -> Path | None:
        for candidate in (path, *path.parents):
            if (candidate / ".git").exists():
                return candidate
        return None

    @staticmethod
    def _to_relative(repo: Path, file_path: Path) -> str:
        try:
            return file_path.relative_to(repo).as_posix()
        except ValueError:
            return file_path.as_posix()

    def _run(
        self,
        args: Iterable[str],
        *,
        cwd: Path,
        env: dict[str, str] | None = None,
        capture_output: bool = False,
    ) -> str:
        return self._runner(args, cwd=cwd, env=env, capture_output=capture_output)

    @staticmethod
    def _default_runner(
        args: Iterable[str],
        *,
        cwd: Path,
        env: dict[str, str] | None = None,
        capture_output: bool = False,
    ) -> str:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            env=env,
            check=True,
            text=True,
            capture_output=capture_output,
        )
        if capture_output:
            return completed.stdout
        return ""


__all__ = ["Publisher"]
