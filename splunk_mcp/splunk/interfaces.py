"""Interfaces for Splunk client components."""

from abc import ABC, abstractmethod


class SessionProvider(ABC):
    """Interface for obtaining a session token."""

    @abstractmethod
    async def ensure_authenticated(self) -> str:
        """Log in and return a fresh session token.

        Returns:
            Session token to send with authenticated requests

        Raises:
            AuthenticationError: If login fails
        """
        pass
