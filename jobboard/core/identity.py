from dataclasses import dataclass

from jobboard.core.enums import Role


@dataclass(frozen=True)
class Identity:
    """Verified caller of a request: who they are and what role they act in."""

    user_id: str
    role: Role

    @classmethod
    def from_user(cls, user) -> "Identity":
        return cls(user_id=user.id, role=Role(user.role))

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
