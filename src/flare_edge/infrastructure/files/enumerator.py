"""Recursive file listing for the deployment root."""

from __future__ import annotations

import os
from collections.abc import Sequence
from fnmatch import fnmatchcase
from pathlib import Path

from flare_edge.domain.entities import FileTask
from flare_edge.domain.errors import FilesystemError


def enumerate_files(
    root: str | os.PathLike[str],
    exclude_patterns: Sequence[str] = (),
) -> list[FileTask]:
    """Return every regular file under `root` in directory listing order.

    Directories are descended into, never returned. Symbolic links are
    resolved the way `DirEntry.is_dir()` resolves them by default. A
    directory whose path plus a trailing slash matches an exclude pattern
    is skipped without being read. Any other unreadable directory aborts
    the whole enumeration.
    """

    root_path = Path(root).absolute()
    if not root_path.is_dir():
        raise FilesystemError(
            f"Deployment folder '{root_path}' does not exist or is not a directory."
        )

    tasks: list[FileTask] = []
    _walk(root_path, root_path, tuple(exclude_patterns), tasks)
    return tasks


def is_excluded(relative_path: str, exclude_patterns: Sequence[str]) -> bool:
    """Match a POSIX relative path against glob exclude patterns."""

    return any(fnmatchcase(relative_path, pattern) for pattern in exclude_patterns)


def _walk(
    root: Path,
    directory: Path,
    exclude_patterns: tuple[str, ...],
    tasks: list[FileTask],
) -> None:
    try:
        with os.scandir(directory) as entries:
            children = list(entries)
    except OSError as exc:
        raise FilesystemError(f"Cannot read directory '{directory}': {exc}") from exc

    for entry in children:
        path = Path(entry.path)
        try:
            is_directory = entry.is_dir()
        except OSError as exc:
            raise FilesystemError(f"Cannot stat '{path}': {exc}") from exc

        relative_path = path.relative_to(root).as_posix()
        if is_directory:
            # "dir/" matches both "dir/**" and "dir/*".
            if exclude_patterns and is_excluded(f"{relative_path}/", exclude_patterns):
                continue
            _walk(root, path, exclude_patterns, tasks)
            continue

        if exclude_patterns and is_excluded(relative_path, exclude_patterns):
            continue
        tasks.append(FileTask(absolute_path=path, relative_path=relative_path))


__all__ = ["enumerate_files", "is_excluded"]
