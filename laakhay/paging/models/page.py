"""Page data model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Page(BaseModel):
    """One bounded batch of items plus the query for the following batch."""

    items: list[Any] = Field(default_factory=list)
    next_query: dict[str, Any] | str | None = None
    raw_response: Any = None

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @property
    def is_last(self) -> bool:
        """Whether no further pages exist."""
        return not self.next_query
