"""Decides who may change which labels.

Team members may change any label. Everyone else is limited by the repo's
ordered ``allow-unauthenticated`` list of glob patterns. A pattern prefixed
with ``!`` denies; the first matching deny ends the scan, so nothing after it
can re-allow the label.
"""

from __future__ import annotations

import fnmatch
import logging
import re
from enum import Enum
from typing import Pattern, Sequence

from .errors import ConfigError
from .models import MembershipStatus

LOGGER = logging.getLogger(__name__)


class CheckFilterResult(str, Enum):
    ALLOW = "allow"
    DENY = "deny"
    # Denied because membership could not be verified.
    DENY_UNKNOWN = "deny_unknown"


class MatchPatternResult(str, Enum):
    ALLOW = "allow"
    DENY = "deny"
    NO_MATCH = "no_match"


def _validate_glob(pattern: str) -> None:
    i = 0
    while i < len(pattern):
        if pattern[i] == "[":
            j = i + 1
            if j < len(pattern) and pattern[j] == "!":
                j += 1
            # A ']' right after the opening bracket is a literal member.
            if j < len(pattern) and pattern[j] == "]":
                j += 1
            close = pattern.find("]", j)
            if close == -1:
                raise ConfigError(f"invalid glob {pattern!r}: unclosed character class")
            i = close + 1
            continue
        if pattern.startswith("**", i):
            run_end = i
            while run_end < len(pattern) and pattern[run_end] == "*":
                run_end += 1
            starts_component = i == 0 or pattern[i - 1] == "/"
            ends_component = run_end == len(pattern) or pattern[run_end] == "/"
            if run_end - i > 2 or not (starts_component and ends_component):
                raise ConfigError(
                    f"invalid glob {pattern!r}: recursive wildcards must form a single path component"
                )
            i = run_end
            continue
        i += 1


def compile_glob(pattern: str) -> Pattern[str]:
    """Compile a glob into a case-insensitive regex, rejecting malformed globs."""
    _validate_glob(pattern)
    return re.compile(fnmatch.translate(pattern), re.IGNORECASE)


def match_pattern(pattern: str, label: str) -> MatchPatternResult:
    inverse = pattern.startswith("!")
    if inverse:
        pattern = pattern[1:]

    if not compile_glob(pattern).match(label):
        return MatchPatternResult.NO_MATCH
    return MatchPatternResult.DENY if inverse else MatchPatternResult.ALLOW


def check_filter(
    label: str,
    membership: MembershipStatus,
    allow_unauthenticated: Sequence[str],
) -> CheckFilterResult:
    """Return whether a user with ``membership`` may add or remove ``label``.

    Raises ``ConfigError`` if a pattern in the list is not a valid glob.
    """
    if membership == MembershipStatus.MEMBER:
        return CheckFilterResult.ALLOW

    matched = False
    for pattern in allow_unauthenticated:
        try:
            result = match_pattern(pattern, label)
        except ConfigError:
            LOGGER.error("Failed to match label %r against pattern %r", label, pattern)
            raise
        if result == MatchPatternResult.ALLOW:
            matched = True
        elif result == MatchPatternResult.DENY:
            matched = False
            break

    if matched:
        return CheckFilterResult.ALLOW
    if membership == MembershipStatus.OUTSIDER:
        return CheckFilterResult.DENY
    return CheckFilterResult.DENY_UNKNOWN
