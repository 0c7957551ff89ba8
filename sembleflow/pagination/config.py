from typing import Any, Mapping

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from sembleflow.exceptions import ConfigurationError

DEFAULT_PAGE_SIZE = 50
DEFAULT_SAFETY_BOUND = 1000


class PaginationConfig(BaseModel):
    """Fully specified pagination settings for one logical fetch."""

    model_config = ConfigDict(frozen=True)

    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE,
        gt=0,
        validation_alias=AliasChoices("page_size", "pageSize"),
        description="Records per page in single-page mode",
    )
    return_all: bool = Field(
        default=False,
        validation_alias=AliasChoices("return_all", "returnAll"),
        description="Fetch every page instead of only the first one",
    )
    search: str | None = Field(default=None, description="Free-text search term")
    options: dict[str, Any] = Field(
        default_factory=dict, description="Extra options forwarded to the query"
    )
    safety_bound: int = Field(
        default=DEFAULT_SAFETY_BOUND,
        gt=0,
        validation_alias=AliasChoices("safety_bound", "safetyBound"),
        description="Page count at which a progress warning is logged",
    )
    max_pages: int | None = Field(
        default=None,
        gt=0,
        validation_alias=AliasChoices("max_pages", "maxPages"),
        description="Hard ceiling on pages fetched in auto-pagination",
    )


def normalize(raw_options: Mapping[str, Any] | None = None) -> PaginationConfig:
    """
    Turns loosely typed caller options into a PaginationConfig.

    Missing or ``None`` values fall back to the defaults. An empty search
    term means "no search" and is never forwarded to the API.

    Args:
        raw_options (Mapping[str, Any] | None): Options as supplied by the
            caller, with snake_case or camelCase keys.

    Returns:
        PaginationConfig: The normalized configuration.

    Raises:
        ConfigurationError: If a value is out of range, e.g. a page size of
            zero or less.
    """
    options = {
        key: value for key, value in (raw_options or {}).items() if value is not None
    }

    search = options.get("search")
    if isinstance(search, str) and not search.strip():
        del options["search"]

    try:
        return PaginationConfig.model_validate(options)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid pagination options: {e}") from e
