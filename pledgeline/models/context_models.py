"""Pledgeline — Session Context."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class SessionContext(BaseModel):
    """Read-only ambient values supplied by the caller at trigger time."""

    model_config = ConfigDict(frozen=True)

    profile_uuid: Optional[str] = None
    currency: str = "USD"

    @property
    def has_profile(self) -> bool:
        return bool(self.profile_uuid and self.profile_uuid.strip())
