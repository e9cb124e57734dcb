"""Common value types exchanged with Redis callers."""

from pydantic import Field

from .base import ToolkitBaseModel


class ScoredMember(ToolkitBaseModel):
    """Sorted-set member together with its score."""

    member: str = Field(description="Sorted-set member")
    score: float = Field(description="Member score")

    def as_mapping(self) -> dict[str, float]:
        """Return the member in the shape expected by ZADD."""
        return {self.member: self.score}
