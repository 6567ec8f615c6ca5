"""
Infrastructure adapter: Supabase access tokens → ITokenValidator.
See docs/Architecture.md for the layering rules.

Supabase signs user access tokens with the project's JWT secret (HS256) and
sets aud="authenticated". Validation is local; no network call is made.
"""

from jose import JWTError, jwt

from src.domain.entities.watchlist_item import AuthenticatedUser
from src.domain.ports.token_validator_port import ITokenValidator


class SupabaseTokenValidator(ITokenValidator):
    """Validates Supabase-issued JWTs against the project secret."""

    AUDIENCE = "authenticated"

    def __init__(self, jwt_secret: str, issuer: str | None = None) -> None:
        self._secret = jwt_secret
        self._issuer = issuer

    def validate(self, token: str) -> AuthenticatedUser:
        """Decode and validate a Supabase access token.

        Raises:
            ValueError: on any validation failure (bad signature, expiry,
                        wrong audience/issuer, missing subject).
        """
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=["HS256"],
                audience=self.AUDIENCE,
                issuer=self._issuer,
            )
        except JWTError as exc:
            raise ValueError(f"Token validation failed: {exc}") from exc

        subject = claims.get("sub")
        if not subject:
            raise ValueError("Token has no subject claim")
        return AuthenticatedUser(user_id=subject, email=claims.get("email"))
