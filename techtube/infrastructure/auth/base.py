"""Abstract base class for session verification."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass
class AuthSession:
    """The acting identity behind a request."""

    user_id: str
    email: str | None = None
    name: str | None = None
    expires_at: str | None = None
    raw: dict[str, Any] = field(default_factory=dict)


class SessionVerifierBase(ABC):
    """Resolves request credentials to a session.

    Login, sign-up and token issuance belong to the external auth service;
    implementations only ask it who the caller is.
    """

    @abstractmethod
    async def get_session(
        self,
        headers: Mapping[str, str],
    ) -> AuthSession | None:
        """Look up the session for a request.

        Args:
            headers: Incoming request headers (``Cookie``, ``Authorization``).

        Returns:
            Session if the caller is authenticated, None otherwise.
        """

    async def close(self) -> None:  # noqa: B027
        """Release held resources. Default is a no-op."""
