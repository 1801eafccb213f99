"""
Fan-out/fan-in over independent remote lookups.

Every branch writes only its own result slot, keyed by the input key, and
the join happens after all branches have finished. There is no
cancellation: if any branch raised, the whole call raises
RemoteQueryFailed once every branch is done, carrying the failures and the
results of the branches that succeeded.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Hashable, Iterable, TypeVar

from errors import RemoteQueryFailed

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
R = TypeVar("R")

DEFAULT_MAX_WORKERS = 8


def fan_out(func: Callable[[K], R], keys: Iterable[K],
            max_workers: int = DEFAULT_MAX_WORKERS,
            description: str = "lookup") -> dict[K, R]:
    """
    Run func(key) concurrently for each unique key.

    Returns: Dict of key -> result, in first-seen key order

    Raises:
        RemoteQueryFailed: one or more branches raised
    """
    keys = list(dict.fromkeys(keys))
    if not keys:
        return {}

    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(keys)))) as executor:
        futures = {key: executor.submit(func, key) for key in keys}

    results: dict = {}
    failures: dict = {}
    for key, future in futures.items():
        error = future.exception()
        if error is None:
            results[key] = future.result()
        else:
            failures[key] = error

    if failures:
        first_key, first_error = next(iter(failures.items()))
        logger.warning(
            f"{len(failures)} of {len(keys)} {description}(s) failed; first: {first_key}: {first_error}"
        )
        raise RemoteQueryFailed(
            f"{len(failures)} of {len(keys)} {description}(s) failed",
            failures=failures,
            partial=results,
        )

    return results
