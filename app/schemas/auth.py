"""Principal schema."""
from pydantic import BaseModel, ConfigDict

from app.models.user import UserRole


class Principal(BaseModel):
    """Authenticated caller as supplied by the session provider."""

    id: int
    email: str
    role: UserRole

    model_config = ConfigDict(from_attributes=True)

    @property
    def is_owner(self) -> bool:
        return self.role == UserRole.OWNER
