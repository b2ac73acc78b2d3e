"""
What a filtered search returns when nothing matches.

The public API treats "no results for these filters" as 404 rather than an
empty list. Flip EMPTY_SEARCH_IS_NOT_FOUND to return [] instead; the query
building is unaffected either way.
"""

from typing import Any, Dict, List

from jobly.core.config import settings
from jobly.core.exceptions import NotFoundError


def require_results(rows: List[Dict[str, Any]], message: str) -> List[Dict[str, Any]]:
    """
    Apply the empty-search policy to the rows of a filtered search.

    Raises:
        NotFoundError: If rows is empty and the policy is enabled
    """
    if not rows and settings.EMPTY_SEARCH_IS_NOT_FOUND:
        raise NotFoundError(message)
    return rows
