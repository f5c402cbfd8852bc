from pydantic import BaseModel, Field, SerializeAsAny


class PaginationResult[T](BaseModel):
    """Page of entries for list endpoints."""

    # SerializeAsAny keeps subclass fields (CadetEntry, PoomsaeEntry) in responses
    items: list[SerializeAsAny[T]] = Field(..., description="Entries in the current page")
    total: int = Field(..., description="Total number of entries across all pages", ge=0)
    limit: int = Field(..., description="Maximum entries per page", ge=1)
    offset: int = Field(..., description="Number of entries skipped", ge=0)

    @property
    def has_more(self) -> bool:
        """Whether there are more entries beyond the current page."""
        return self.offset + len(self.items) < self.total
