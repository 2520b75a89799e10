"""
Tombstone domain model.

A deletion marker for an entry that was published earlier and has since
been withdrawn (RFC 6721 ``at:deleted-entry``). Lives in the same ordered
sequence as regular entries.

Responsibility: Deleted-entry container
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.dates import coerce_timestamp, ensure_utc
from .entry import Author


class Tombstone(BaseModel):
    """
    Marker announcing that the entry identified by ``reference`` is gone.

    ``reference`` and ``when`` are required at render time.
    """

    model_config = ConfigDict(validate_assignment=True)

    reference: Optional[str] = Field(
        default=None,
        description="Identifier of the deleted entry"
    )
    when: Optional[datetime] = Field(default=None, description="Deletion time")
    by: Optional[Author] = Field(default=None, description="Who deleted the entry")
    comment: Optional[str] = Field(default=None)
    link: Optional[str] = Field(default=None)

    # MARK: - Inherited from the feed
    encoding: Optional[str] = Field(default=None)
    type: Optional[str] = Field(default=None)

    @field_validator("when", mode="before")
    @classmethod
    def parse_timestamp(cls, v: Any) -> Any:
        return coerce_timestamp(v)

    @field_validator("when")
    @classmethod
    def make_aware(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(v)

    def effective_timestamp(self, now: int) -> int:
        """Deletion time in epoch seconds, else ``now``"""
        if self.when is not None:
            return int(self.when.timestamp())
        return now
