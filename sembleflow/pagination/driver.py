from typing import Any, Generator

from sembleflow.client.executor import QueryExecutor, RequestSpec
from sembleflow.log import logger

from .config import PaginationConfig
from .models import PageEnvelope, PaginationMeta, PaginationResult, QuerySpec

# Page size used when every page is fetched anyway
AUTO_PAGE_SIZE = 100


class PaginationDriver:
    """
    Fetches one page or a whole collection from a paginated GraphQL field.

    Pages are requested one at a time in increasing page order and their
    records are appended in the order the server sent them.
    """

    def __init__(self, executor: QueryExecutor):
        """
        Initializes the driver.

        Args:
            executor (QueryExecutor): Executor used for every page request.
        """
        self.executor = executor
        self.logger = logger.getChild(self.__class__.__name__)

    def fetch(
        self, query_spec: QuerySpec, data_location: str, config: PaginationConfig
    ) -> PaginationResult:
        """
        Fetches records according to the pagination config.

        Args:
            query_spec (QuerySpec): Query and shared variables.
            data_location (str): Key of the paginated field in the response.
            config (PaginationConfig): Normalized pagination settings.

        Returns:
            PaginationResult: Accumulated records and pagination metadata.

        Raises:
            QueryError: If a page request fails.
        """
        records: list[Any] = []
        pages_processed = 0
        last_page = PageEnvelope(present=False)

        for envelope in self.iter_pages(query_spec, data_location, config):
            records.extend(envelope.records)
            pages_processed += 1
            last_page = envelope

        meta = PaginationMeta(
            pages_processed=pages_processed,
            total_records=len(records),
            has_more=None if config.return_all else last_page.has_more,
        )

        self.logger.info(
            f"Fetched {meta.total_records} records from '{data_location}' "
            f"in {pages_processed} page(s)"
        )
        return PaginationResult(data=records, meta=meta)

    def iter_pages(
        self,
        query_spec: QuerySpec,
        data_location: str,
        config: PaginationConfig,
        page_size: int | None = None,
    ) -> Generator[PageEnvelope, None, None]:
        """
        Yields pages in order until the collection is exhausted.

        In single-page mode only page 1 is requested. In auto-pagination mode
        pages are requested until the server stops reporting ``hasMore``, a
        page comes back empty, the response has no usable envelope, or
        ``config.max_pages`` is reached. Passing the safety bound alone never
        stops the loop while pages keep yielding records.

        Args:
            query_spec (QuerySpec): Query and shared variables.
            data_location (str): Key of the paginated field in the response.
            config (PaginationConfig): Normalized pagination settings.
            page_size (int | None): Overrides the page size. Defaults to
                ``config.page_size`` for a single page and 100 otherwise.

        Yields:
            PageEnvelope: One envelope per page request.
        """
        if not config.return_all:
            yield self._fetch_page(
                query_spec, data_location, config, 1, page_size or config.page_size
            )
            return

        size = page_size or AUTO_PAGE_SIZE
        page = 1

        while True:
            envelope = self._fetch_page(query_spec, data_location, config, page, size)
            yield envelope

            if not envelope.present:
                self.logger.warning(
                    f"No '{data_location}' page in response, stopping pagination"
                )
                break

            if not envelope.has_more:
                break

            if not envelope.records:
                # hasMore with nothing on the page: no progress is being made
                self.logger.warning(
                    f"Page {page} of '{data_location}' was empty but reported "
                    "more pages, stopping pagination"
                )
                break

            if page == config.safety_bound:
                self.logger.warning(
                    f"Reached {config.safety_bound} pages of '{data_location}', "
                    "continuing while pages keep returning records"
                )

            if config.max_pages and page >= config.max_pages:
                self.logger.info(f"Stopping pagination at max_pages={config.max_pages}")
                break

            page += 1

    def _fetch_page(
        self,
        query_spec: QuerySpec,
        data_location: str,
        config: PaginationConfig,
        page: int,
        page_size: int,
    ) -> PageEnvelope:
        variables = self.build_variables(query_spec, config, page, page_size)

        if query_spec.debug:
            self.logger.debug(f"Fetching page {page} (pageSize={page_size})")

        data = self.executor.execute(
            RequestSpec(
                query=query_spec.query,
                variables=variables,
                max_retries=query_spec.max_retries,
                debug=query_spec.debug,
                operation_name=query_spec.operation_name,
            )
        )
        envelope = PageEnvelope.from_response(data, data_location)

        if query_spec.debug:
            self.logger.debug(
                f"Page {page}: {len(envelope.records)} records, "
                f"hasMore={envelope.has_more}"
            )
        return envelope

    @staticmethod
    def build_variables(
        query_spec: QuerySpec, config: PaginationConfig, page: int, page_size: int
    ) -> dict[str, Any]:
        """Merges pagination, options and search into the base variables."""
        variables: dict[str, Any] = {
            **query_spec.base_variables,
            "pagination": {"page": page, "pageSize": page_size},
            "options": dict(config.options),
        }
        # An empty search is not the same as no search for this API
        if config.search:
            variables["search"] = config.search
        return variables
