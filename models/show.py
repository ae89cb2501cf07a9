"""
Show model for AnimeWatch, representing a show from the season listing and its subscription state.
"""
import logging
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator

logger = logging.getLogger(__name__)

class Show(BaseModel):
    """
    Represents a show that can be subscribed to.

    Attributes:
        id (Optional[int]): Database ID (assigned by the store).
        title (str): Show title as listed on the season page. Unique.
        subscribed (bool): Whether new episodes of this show are tracked.

    Methods:
        from_db_record(): Construct from DB record.
    """

    model_config = ConfigDict(
        from_attributes=True,
        validate_assignment=True,
        extra='forbid'
    )

    id: Optional[int] = Field(None, description="Database ID (auto-generated)")
    title: str = Field(..., description="Show title")
    subscribed: bool = Field(False, description="Whether the show is subscribed")

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        """Ensure title is not empty and carries no surrounding whitespace."""
        if not v or not v.strip():
            raise ValueError("title cannot be empty")
        return v.strip()

    @classmethod
    def from_db_record(cls, record: dict) -> "Show":
        """
        Construct a Show object from a database record.

        Args:
            record (dict): Database record for the show.

        Returns:
            Show: Instantiated Show object.
        """
        return cls(
            id=record["id"],
            title=record["title"],
            subscribed=bool(record["subscribed"]),
        )
