"""
Path Sandbox
Directory browsing confined to the save root
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import List

from ..models.torrent_view import LocalFileEntry
from .config import Config
from .errors import NotFoundError, SandboxIOError


class PathSandbox:
    """Resolves caller paths against the save root and lists directories"""

    def __init__(self, config: Config):
        self.root = config.save_root.resolve()

    def _within_root(self, path: Path) -> bool:
        return path == self.root or self.root in path.parents

    def resolve(self, relative: str) -> Path:
        """
        Canonical absolute path for a caller-supplied relative path.

        Leading slashes are ignored. Anything that canonicalizes outside the
        root (".." segments, symlinks) is clamped to the root itself. Paths
        that cannot be canonicalized (NUL bytes, symlink loops) are not found.
        """
        cleaned = str(relative or "").replace("\\", "/").lstrip("/")
        if "\x00" in cleaned:
            raise NotFoundError(f"Path not found: {relative!r}")
        try:
            candidate = (self.root / cleaned).resolve()
        except (OSError, RuntimeError, ValueError) as exc:
            raise NotFoundError(f"Path not found: {relative!r}") from exc
        if not self._within_root(candidate):
            return self.root
        return candidate

    def list_dir(self, relative: str) -> List[LocalFileEntry]:
        """
        List the immediate entries of a directory under the root.

        A path to a regular file lists the file's parent directory. Entries
        come back in filesystem order with root-relative paths.
        """
        target = self.resolve(relative)
        if not target.exists():
            raise NotFoundError(f"Path not found: {relative}")
        if not target.is_dir():
            target = target.parent

        try:
            with os.scandir(target) as it:
                names = [entry.name for entry in it]
        except OSError as exc:
            raise SandboxIOError(f"Cannot read directory {relative!r}: {exc.strerror or exc}") from exc

        files: List[LocalFileEntry] = []
        for name in names:
            path = target / name
            try:
                canonical = path.resolve()
            except (OSError, RuntimeError):
                # symlink loop or dangling chain; skip just this entry
                continue
            if not self._within_root(canonical):
                continue
            files.append(LocalFileEntry(name=name, full_path=path.relative_to(self.root).as_posix()))
        return files
