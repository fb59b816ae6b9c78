"""Port: profile fetcher — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from profile_analyzer.domain.entities import UserData


class ProfileFetcher(Protocol):
    """Abstract contract for gathering everything the engine scores."""

    async def fetch_user_data(self, username: str) -> UserData:
        """Return a fully resolved snapshot for *username*.

        Raises ``UserNotFoundError`` when the account does not exist and
        ``GitHubRateLimitError`` when GitHub throttles the caller.
        """
        ...
