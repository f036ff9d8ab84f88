"""Per-request identity materialized from a server-side session."""

from dataclasses import asdict, dataclass
from typing import Optional

from .roles import Role


@dataclass(frozen=True)
class Identity:
    """The authenticated principal attached to a request."""

    user_id: str
    role: Role
    name: str
    email: str

    def to_session(self) -> dict:
        data = asdict(self)
        data["role"] = self.role.value
        return data

    @classmethod
    def from_session(cls, data: dict) -> Optional["Identity"]:
        """Rebuild an identity from stored session data; None if the record is unusable."""
        try:
            return cls(
                user_id=str(data["user_id"]),
                role=Role(data["role"]),
                name=data.get("name", ""),
                email=data.get("email", ""),
            )
        except (KeyError, ValueError):
            return None
