"""Glob pattern matching for fully-qualified class names."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

__all__ = ["GlobPattern", "compile_glob", "compile_globs", "matches_any", "filter_names"]

_WILDCARD = re.compile(r"(\*\*)|(\*)")

# '.' separates module path segments, '$' separates nested classes
_ANY = ".*"
_ANY_WITHIN_SEGMENT = "[^.$]*"


@dataclass(frozen=True)
class GlobPattern:
    """A compiled glob, matched against the whole candidate name."""

    glob: str
    regex: re.Pattern[str]

    def matches(self, name: str) -> bool:
        return self.regex.fullmatch(name) is not None


def compile_glob(glob: str) -> GlobPattern:
    """Compile a glob into a full-match regular expression.

    '**' matches any sequence of characters, '*' matches any sequence that
    does not contain '.' or '$'. All other characters match literally.

    Wildcards are tokenized left to right as '**' when possible and '*'
    otherwise, so '***' compiles to '**' followed by '*'.

    Args:
        glob: The glob string. Never rejected.

    Returns:
        The compiled GlobPattern.
    """
    parts: list[str] = []
    last_end = 0
    for match in _WILDCARD.finditer(glob):
        parts.append(re.escape(glob[last_end : match.start()]))
        parts.append(_ANY if match.group(1) is not None else _ANY_WITHIN_SEGMENT)
        last_end = match.end()
    parts.append(re.escape(glob[last_end:]))
    return GlobPattern(glob=glob, regex=re.compile("".join(parts)))


def compile_globs(globs: Iterable[str]) -> list[GlobPattern]:
    """Compile each glob, preserving order."""
    return [compile_glob(glob) for glob in globs]


def matches_any(name: str, patterns: Iterable[GlobPattern]) -> bool:
    """Return True if at least one pattern matches the whole name."""
    return any(pattern.matches(name) for pattern in patterns)


def filter_names(names: Iterable[str], globs: Iterable[str]) -> list[str]:
    """Keep the names matched by any of the globs, in input order."""
    patterns = compile_globs(globs)
    return [name for name in names if matches_any(name, patterns)]
