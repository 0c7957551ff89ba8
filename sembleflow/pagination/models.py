from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class QuerySpec(BaseModel):
    """A paginated query and the variables every page shares."""

    model_config = ConfigDict(frozen=True)

    query: str
    base_variables: dict[str, Any] = Field(default_factory=dict)
    max_retries: int | None = Field(default=None, ge=0)
    debug: bool = False
    operation_name: str | None = None


class PageEnvelope(BaseModel):
    """
    Records of one page plus the continuation indicator.

    Attributes:
        records (list[Any]): Records in the order the server sent them.
        has_more (bool): True only if the server said more pages exist.
        present (bool): False if nothing usable was found at the data location.
    """

    records: list[Any] = Field(default_factory=list)
    has_more: bool = False
    present: bool = True

    @classmethod
    def from_response(cls, data: Any, data_location: str) -> "PageEnvelope":
        """
        Extracts a page from a GraphQL ``data`` payload.

        Missing or malformed parts degrade to an empty, final page.

        Args:
            data: The ``data`` member of the response.
            data_location (str): Key of the paginated field, dotted for
                nested fields (e.g. ``"patients"`` or ``"clinic.bookings"``).
        """
        node = data
        for key in data_location.split("."):
            if not isinstance(node, dict):
                node = None
                break
            node = node.get(key)

        if not isinstance(node, dict):
            return cls(present=False)

        records = node.get("data")
        if not isinstance(records, list):
            return cls(present=False)

        page_info = node.get("pageInfo")
        has_more = isinstance(page_info, dict) and page_info.get("hasMore") is True

        return cls(records=records, has_more=has_more)


class PaginationMeta(BaseModel):
    pages_processed: int
    total_records: int
    # Only meaningful for single-page fetches
    has_more: bool | None = None


class PaginationResult(BaseModel):
    data: list[Any] = Field(default_factory=list)
    meta: PaginationMeta
