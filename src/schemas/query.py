"""Query descriptor schema.

A QueryDescriptor is the structured form of a search box query. It is
produced by the four-digit fast path, by the natural-language bridge, or by
the local substring fallback. It is never persisted.
"""

from pydantic import BaseModel, ConfigDict


class QueryDescriptor(BaseModel):
    """Cumulative record filter.

    Attributes:
        year: Keep only records from this year
        month: Keep only records from this month (case-insensitive)
        text: Keep only records whose search index contains this text
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    year: int | None = None
    month: str | None = None
    text: str | None = None

    @property
    def is_empty(self) -> bool:
        return not (self.year or self.month or self.text)
