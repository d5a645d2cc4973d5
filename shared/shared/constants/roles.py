from enum import Enum


class Role(str, Enum):
    """Account roles as carried in the ``roles`` JWT claim."""

    USER = "user"
    ADMIN = "admin"

    @classmethod
    def from_claim(cls, raw: list | None) -> list["Role"]:
        """Parse a ``roles`` claim, dropping values this service does not know."""
        known = {r.value for r in cls}
        return [cls(r) for r in raw or [] if r in known]
