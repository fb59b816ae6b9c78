"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass

from profile_analyzer.domain.exceptions import InvalidUsernameError

_LOGIN = r"[a-z0-9](?:[a-z0-9-]*[a-z0-9])?"

_INPUT_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(rf"^https://github\.com/({_LOGIN})/?$"),
    re.compile(rf"^https://www\.github\.com/({_LOGIN})/?$"),
    re.compile(rf"^github\.com/({_LOGIN})/?$"),
    re.compile(rf"^({_LOGIN})$"),
)

_LOGIN_RE = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?$")

MAX_INPUT_LENGTH = 100
MAX_LOGIN_LENGTH = 39
RESERVED_WORDS: frozenset[str] = frozenset(
    {"api", "www", "mail", "ftp", "localhost", "admin"}
)


@dataclass(frozen=True, slots=True)
class GitHubUsername:
    """Validated GitHub login.

    Accepts either a bare login (``octocat``) or a profile URL such as
    ``https://github.com/octocat``.  The login is normalised to lower case,
    which is also what the analysis cache is keyed on.
    """

    login: str
    raw: str

    @classmethod
    def from_string(cls, value: str) -> GitHubUsername:
        """Parse and validate a raw login or profile URL."""
        if not isinstance(value, str) or not value:
            raise InvalidUsernameError("Input is required")

        trimmed = value.strip()
        if not trimmed:
            raise InvalidUsernameError("Input cannot be empty")
        if len(trimmed) > MAX_INPUT_LENGTH:
            raise InvalidUsernameError("Input is too long")

        login = _extract_login(trimmed.lower())
        if login is None:
            raise InvalidUsernameError(
                "Invalid GitHub URL format. Use: https://github.com/username"
            )
        if not _LOGIN_RE.match(login):
            raise InvalidUsernameError("Invalid GitHub username format")
        if len(login) > MAX_LOGIN_LENGTH:
            raise InvalidUsernameError(
                f"GitHub username too long (max {MAX_LOGIN_LENGTH} characters)"
            )
        if login in RESERVED_WORDS:
            raise InvalidUsernameError("Invalid username (reserved word)")

        return cls(login=login, raw=value)

    @property
    def cache_key(self) -> str:
        return f"analysis:{self.login}"


def _extract_login(value: str) -> str | None:
    for pattern in _INPUT_PATTERNS:
        match = pattern.match(value)
        if match:
            return match[1]
    return None
