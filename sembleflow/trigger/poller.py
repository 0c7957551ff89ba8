from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from sembleflow.log import logger
from sembleflow.pagination.config import PaginationConfig
from sembleflow.pagination.driver import PaginationDriver
from sembleflow.pagination.models import QuerySpec

from .config import PollConfig, calculate_date_range_start


class PollResult(BaseModel):
    data: list[dict[str, Any]] = Field(default_factory=list)
    has_new_data: bool = False
    poll_time: str
    filtered_count: int = 0
    total_count: int = 0
    state: dict[str, Any] = Field(default_factory=dict)


def parse_timestamp(value: Any) -> datetime | None:
    """Parses an ISO 8601 timestamp, treating naive values as UTC."""
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class Poller:
    """
    Reports records created or updated since the previous poll.

    The caller owns the poll state and passes back the ``state`` of the
    previous PollResult on the next run.
    """

    def __init__(self, driver: PaginationDriver):
        self.driver = driver
        self.logger = logger.getChild(self.__class__.__name__)

    def poll(
        self,
        query_spec: QuerySpec,
        data_location: str,
        config: PollConfig,
        state: dict[str, Any] | None = None,
        now: datetime | None = None,
    ) -> PollResult:
        """
        Fetches recent records and keeps the ones changed after the cutoff.

        The cutoff is the previous poll time, or the start of the configured
        date period on the first run.

        Args:
            query_spec (QuerySpec): Query accepting ``dateRange`` and
                ``pagination`` variables.
            data_location (str): Key of the paginated field in the response.
            config (PollConfig): Event type, look-back window and paging limits.
            state (dict[str, Any] | None): State returned by the previous poll.
            now (datetime | None): Poll time, naive values are taken as UTC.
                Defaults to the current UTC time.

        Returns:
            PollResult: Matching records and the state for the next poll.
        """
        state = state or {}
        now = now if now else datetime.now(timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        range_start = calculate_date_range_start(config.date_period, now)

        last_poll = parse_timestamp(state.get("last_poll"))
        if last_poll:
            cutoff = last_poll
            self._debug(config, f"Last poll: {last_poll.isoformat()}")
        else:
            cutoff = range_start
            self._debug(config, f"First run, using {cutoff.isoformat()} as cutoff")

        spec = query_spec.model_copy(
            update={
                "base_variables": {
                    **query_spec.base_variables,
                    "dateRange": {
                        "start": range_start.date().isoformat(),
                        "end": now.date().isoformat(),
                    },
                }
            }
        )
        pagination = PaginationConfig(return_all=True, max_pages=config.max_pages)

        records: list[Any] = []
        for envelope in self.driver.iter_pages(
            spec, data_location, pagination, page_size=config.limit
        ):
            records.extend(envelope.records)

        if config.event == "newOnly" and last_poll:
            date_field = config.created_field
        else:
            date_field = config.updated_field

        filtered = [
            record
            for record in records
            if isinstance(record, dict)
            and self._changed_after(record, date_field, cutoff)
        ]
        self._debug(
            config,
            f"Kept {len(filtered)} of {len(records)} records "
            f"with {date_field} after {cutoff.isoformat()}",
        )

        poll_time = now.isoformat()
        data = [
            {
                **record,
                "__meta": {
                    "event": config.event,
                    "poll_time": poll_time,
                    "is_new": (
                        self._changed_after(record, config.created_field, cutoff)
                        if last_poll
                        else True
                    ),
                },
            }
            for record in filtered
        ]

        return PollResult(
            data=data,
            has_new_data=len(data) > 0,
            poll_time=poll_time,
            filtered_count=len(filtered),
            total_count=len(records),
            state={**state, "last_poll": poll_time},
        )

    @staticmethod
    def _changed_after(record: dict[str, Any], field: str, cutoff: datetime) -> bool:
        timestamp = parse_timestamp(record.get(field))
        return timestamp is not None and timestamp > cutoff

    def _debug(self, config: PollConfig, message: str) -> None:
        if config.debug:
            self.logger.debug(message)
