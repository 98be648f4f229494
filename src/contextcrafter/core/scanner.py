# src/contextcrafter/core/scanner.py
import logging
import os
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

from contextcrafter.config import BINARY_SNIFF_BYTES, MAX_FILE_COUNT
from contextcrafter.core.ignore import IgnoreMatcher
from contextcrafter.errors import FileLimitExceededError, UpstreamFetchError
from contextcrafter.models import FilePayload

logger = logging.getLogger(__name__)


def load_ignore_patterns(
    root_dir: Path,
    extra_patterns: Optional[Sequence[str]] = None,
    use_gitignore: bool = True,
) -> List[str]:
    """Root-level .gitignore lines first, then the user's own patterns."""
    lines: List[str] = []
    gitignore_file = root_dir / ".gitignore"
    if use_gitignore and gitignore_file.is_file():
        try:
            lines.extend(gitignore_file.read_text(encoding="utf-8").splitlines())
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s: %s", gitignore_file, e)

    if extra_patterns:
        lines.extend(extra_patterns)
    return lines


class ProjectScanner:
    def __init__(self, root_dir: Path, matcher: IgnoreMatcher, max_files: int = MAX_FILE_COUNT):
        self.root_dir = root_dir
        self.matcher = matcher
        self.max_files = max_files

    def _read_text(self, path: Path) -> Optional[str]:
        """
        Reads the first bytes to check for null bytes and returns None for
        likely binary files. Only text files are read to the end.
        """
        with path.open("rb") as f:
            head = f.read(BINARY_SNIFF_BYTES)
            if b"\0" in head:
                return None
            data = head + f.read()
        # Decoded from bytes so line endings reach the engine untouched.
        return data.decode("utf-8")

    def scan(self) -> Iterator[FilePayload]:
        """
        Walks the directory tree, pruning ignored directories,
        and yields FilePayload objects for readable text files.

        Raises FileLimitExceededError as soon as more than max_files
        eligible files are found.
        """
        if not self.root_dir.is_dir():
            raise UpstreamFetchError(f"Invalid directory '{self.root_dir}'")

        # Negations may re-include files under an ignored directory, so only prune without them.
        prune = not self.matcher.has_negations
        count = 0

        for root, dirs, files in os.walk(self.root_dir):
            root_path = Path(root)
            dirs.sort()

            if prune:
                for d in list(dirs):
                    dir_rel_path = (root_path / d).relative_to(self.root_dir).as_posix()
                    if self.matcher.is_ignored(dir_rel_path, is_directory=True):
                        logger.debug("Pruning directory %s", dir_rel_path)
                        dirs.remove(d)

            for f in sorted(files):
                file_abs_path = root_path / f
                rel_path = file_abs_path.relative_to(self.root_dir).as_posix()

                if self.matcher.is_ignored(rel_path):
                    continue

                try:
                    content = self._read_text(file_abs_path)
                    if content is None:
                        logger.debug("Skipping binary file %s", rel_path)
                        continue
                except UnicodeDecodeError:
                    logger.debug("Skipping undecodable file %s", rel_path)
                    continue
                except OSError as e:
                    logger.warning("Skipping %s (read error: %s)", rel_path, e)
                    continue

                count += 1
                if count > self.max_files:
                    raise FileLimitExceededError(self.max_files)
                yield FilePayload(path=rel_path, content=content)
