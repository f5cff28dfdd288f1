"""Port definition for issuing and verifying signed session tokens."""

from typing import Protocol

from domain.model.user import TokenClaims, User


class TokenSigner(Protocol):
    def issue(self, user: User) -> str:
        """Encode the user's id, email and role into a signed token."""
        ...

    def verify(self, token: str) -> TokenClaims | None:
        """Return the token's claims, or None if it is invalid or expired."""
        ...
