# src/contextcrafter/core/ignore.py
import logging
import re
from typing import Iterable, List, Optional, Sequence

import pathspec
from pathspec.pattern import Pattern

from contextcrafter.config import DEFAULT_IGNORE_PATTERNS
from contextcrafter.models import FilePayload

logger = logging.getLogger(__name__)


def compile_rules(rules: Iterable[str]) -> List[Pattern]:
    """
    Compiles gitignore-style lines one by one, keeping their order.
    Blank lines and comments yield no pattern. A line pathspec refuses
    to compile is dropped, so it simply never matches.
    """
    compiled: List[Pattern] = []
    for line in rules:
        line = line.rstrip("\r\n")
        try:
            patterns = pathspec.PathSpec.from_lines("gitwildmatch", [line]).patterns
        except (ValueError, TypeError, re.error) as e:
            logger.debug("Skipping malformed ignore pattern %r: %s", line, e)
            continue
        compiled.extend(p for p in patterns if p.include is not None)
    return compiled


def normalize_path(path: str) -> str:
    while path.startswith("./"):
        path = path[2:]
    return path


class IgnoreMatcher:
    """
    Ordered list of compiled patterns, evaluated last-match-wins.

    The baseline defaults come first, so caller rules can only add exclusions
    on top of them or re-include paths with a negation.
    """

    def __init__(self, rules: Optional[Sequence[str]] = None, include_defaults: bool = True):
        lines: List[str] = list(DEFAULT_IGNORE_PATTERNS) if include_defaults else []
        if rules:
            lines.extend(rules)
        self.patterns = compile_rules(lines)
        self.has_negations = any(not p.include for p in self.patterns)

    def is_ignored(self, path: str, is_directory: bool = False) -> bool:
        path = normalize_path(path)
        if is_directory and not path.endswith("/"):
            path += "/"

        ignored = False
        for pattern in self.patterns:
            if pattern.match_file(path):
                ignored = bool(pattern.include)
        return ignored

    def filter(self, files: Iterable[FilePayload]) -> List[FilePayload]:
        kept = []
        for f in files:
            if self.is_ignored(f.path):
                logger.debug("Ignored %s", f.path)
                continue
            kept.append(f)
        return kept


def is_ignored(path: str, rules: Sequence[str]) -> bool:
    """Checks a single path against the baseline plus the given rules."""
    return IgnoreMatcher(rules).is_ignored(path)
