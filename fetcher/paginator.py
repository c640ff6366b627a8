"""Page URL sequencing for paginated APIs."""
import logging
from typing import Iterator, Optional, Protocol, Tuple

from processor.errors import PaginationError

logger = logging.getLogger(__name__)


class Paginator(Protocol):
    """Maps a base URL and zero-based page index to a page URL, or None when done."""

    def __call__(self, base_url: str, page_index: int) -> Optional[str]:
        ...


def iter_page_urls(
    base_url: str,
    paginate: Optional[Paginator] = None
) -> Iterator[Tuple[int, str]]:
    """
    Lazily yield (page_index, url) pairs for every page to fetch.

    Without a paginator the base URL is yielded once. With one, pages are
    requested from it one index at a time, and only after the caller has
    finished with the previous page, until it returns None or an empty string.

    Args:
        base_url: URL of the API endpoint
        paginate: Optional page URL function

    Yields:
        Tuple of (page_index, page_url)

    Raises:
        PaginationError: If the paginator raises
    """
    if paginate is None:
        yield 0, base_url
        return

    page_index = 0
    while True:
        try:
            url = paginate(base_url, page_index)
        except Exception as e:
            raise PaginationError(
                f"Unable to paginate API! Page {page_index + 1}: {e}"
            ) from e

        if not url:
            logger.debug(f"Pagination finished after {page_index} page(s)")
            return

        yield page_index, url
        page_index += 1
