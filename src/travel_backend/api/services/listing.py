"""Run the count and page queries of a list endpoint side by side."""

from __future__ import annotations

import contextvars
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

ItemT = TypeVar("ItemT")


def _first_error(*futures: Future[object]) -> BaseException | None:
    for future in futures:
        if future.done() and not future.cancelled():
            error = future.exception()
            if error is not None:
                return error
    return None


def count_and_fetch(
    count: Callable[[], int],
    fetch: Callable[[], list[ItemT]],
    *,
    concurrent: bool = True,
) -> tuple[int, list[ItemT]]:
    """Return ``(count(), fetch())``, running both calls at once.

    The first failure is raised as soon as it happens; the sibling call is
    cancelled if it has not started, otherwise its result is dropped. With
    ``concurrent=False`` the calls run one after the other on the caller's
    thread, which is required when both share one transaction session.
    """
    if not concurrent:
        return count(), fetch()

    executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="list-query")
    try:
        # each call gets its own copy of the caller context (active span included)
        count_future = executor.submit(contextvars.copy_context().run, count)
        fetch_future = executor.submit(contextvars.copy_context().run, fetch)
        wait((count_future, fetch_future), return_when=FIRST_EXCEPTION)
        error = _first_error(count_future, fetch_future)
        if error is not None:
            raise error
        return count_future.result(), fetch_future.result()
    finally:
        executor.shutdown(wait=False, cancel_futures=True)


__all__ = ["count_and_fetch"]
