"""Discovery of Solidity source files under a directory tree."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .config import DEFAULT_EXTENSIONS
from .errors import EnumerationError
from .logging import get_logger

# Dependency, build and VCS folders that never hold project contracts.
_SKIPPED_DIRS = frozenset(
    {".git", ".hg", ".svn", ".venv", "node_modules", "__pycache__", "artifacts", "cache"}
)


@dataclass(frozen=True)
class IgnoreRule:
    """One gitignore-style exclusion, from .gitignore or ``exclude_paths``."""

    glob: str
    dirs_only: bool = False
    rooted: bool = False
    negated: bool = False

    @classmethod
    def parse(cls, line: str) -> Optional["IgnoreRule"]:
        """Build a rule from a pattern line; blank lines and comments give ``None``."""
        text = line.strip()
        if not text or text.startswith("#"):
            return None
        negated = text.startswith("!")
        text = text.lstrip("!")
        dirs_only = text.endswith("/")
        text = text.rstrip("/")
        # A slash anywhere but the end ties the pattern to the root, as git does.
        rooted = "/" in text
        text = text.lstrip("/")
        if not text:
            return None
        return cls(glob=text, dirs_only=dirs_only, rooted=rooted, negated=negated)

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if self.dirs_only and not is_dir:
            return False
        if self.rooted:
            return fnmatchcase(rel_path, self.glob)
        return fnmatchcase(rel_path.rsplit("/", 1)[-1], self.glob)


def is_ignored(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    """Last matching rule wins; a negated match re-includes the path."""
    verdict = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            verdict = not rule.negated
    return verdict


def _raise_walk_error(error: OSError) -> None:
    raise EnumerationError(f"Could not list {error.filename}: {error.strerror}") from error


class SourceEnumerator:
    """Walks a directory and returns the source files to diagram, sorted by relative path."""

    def __init__(
        self,
        *,
        extensions: Iterable[str] = DEFAULT_EXTENSIONS,
        exclude_paths: Iterable[str] = (),
        use_gitignore: bool = True,
    ) -> None:
        self.extensions = tuple(ext.lower() for ext in extensions)
        self.exclude_paths = list(exclude_paths)
        self.use_gitignore = use_gitignore
        self.logger = get_logger("sources")

    def discover(self, root: str | Path) -> List[Path]:
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise EnumerationError(f"Input path not found: {root}")
        if not root_path.is_dir():
            raise EnumerationError(f"Input path is not a directory: {root}")

        rules = self._load_rules(root_path)
        found: dict[str, Path] = {}
        for dirpath, dirnames, filenames in os.walk(root_path, onerror=_raise_walk_error):
            current = Path(dirpath)
            prefix = "" if current == root_path else current.relative_to(root_path).as_posix() + "/"

            # Pruning in place keeps os.walk out of skipped subtrees.
            dirnames[:] = [
                name
                for name in dirnames
                if name not in _SKIPPED_DIRS and not is_ignored(prefix + name, True, rules)
            ]
            for filename in filenames:
                rel_path = prefix + filename
                if filename.lower().endswith(self.extensions) and not is_ignored(rel_path, False, rules):
                    found[rel_path] = current / filename

        self.logger.debug("Discovered %d source files under %s", len(found), root_path)
        return [found[rel_path] for rel_path in sorted(found)]

    def _load_rules(self, root: Path) -> List[IgnoreRule]:
        lines: List[str] = []
        gitignore = root / ".gitignore"
        if self.use_gitignore and gitignore.is_file():
            try:
                lines.extend(gitignore.read_text(encoding="utf-8").splitlines())
            except (OSError, UnicodeDecodeError) as exc:
                raise EnumerationError(f"Could not read {gitignore}: {exc}") from exc
        lines.extend(self.exclude_paths)
        return [rule for rule in map(IgnoreRule.parse, lines) if rule is not None]


__all__ = ["IgnoreRule", "SourceEnumerator", "is_ignored"]
