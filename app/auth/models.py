# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from core.models.user import Role


class AuthUser(BaseModel):
    """
    Identity attached to an authenticated request.

    This is what GET /me returns and what every guarded handler receives.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: str
    role: Role


class TokenPayload(BaseModel):
    """
    Decoded session token issued by Supabase Auth.

    Supabase tokens include standard JWT claims plus the provider
    profile under user_metadata (GitHub: full_name, user_name,
    avatar_url, provider_id, email).
    """
    sub: str  # User ID
    email: Optional[str] = None
    phone: Optional[str] = None
    aud: Optional[str | list[str]] = None
    exp: Optional[int] = None
    role: Optional[str] = None  # Postgres role ("authenticated"), not the app role
    user_metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def display_name(self) -> str:
        """Best available name from the provider profile."""
        meta = self.user_metadata
        for key in ("full_name", "name", "user_name", "preferred_username"):
            value = meta.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
        return self.resolved_email.split("@")[0]

    @property
    def resolved_email(self) -> str:
        """
        Email from the token, falling back to the GitHub noreply address
        for accounts that keep their email private.
        """
        email = self.email or self.user_metadata.get("email")
        if email:
            return email
        provider_id = self.user_metadata.get("provider_id") or self.sub
        login = self.user_metadata.get("user_name") or "user"
        return f"{provider_id}+{login}@users.noreply.github.com"

    @property
    def avatar_url(self) -> Optional[str]:
        return self.user_metadata.get("avatar_url") or self.user_metadata.get("picture")
