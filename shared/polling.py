"""Poll-until-deadline and first-match-wins click helpers for page objects."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from typing import Union

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator

logger = logging.getLogger(__name__)

LocatorCandidate = Union[Locator, Callable[[], Locator]]


def _default_sleep(ms: float) -> None:
    time.sleep(ms / 1000)


def poll_until(
    condition: Callable[[], bool],
    timeout_ms: float,
    interval_ms: float,
    sleep: Callable[[float], None] | None = None,
) -> bool:
    """
    Evaluate ``condition`` until it is truthy or the deadline passes.

    The condition always runs at least once, so a zero timeout is a single
    check. Playwright errors raised by the condition count as "not yet".

    Args:
        condition: Zero-argument callable returning a truthy value when done.
        timeout_ms: Wall-clock budget in milliseconds.
        interval_ms: Delay between checks in milliseconds.
        sleep: Delay function taking milliseconds (e.g.
            ``page.wait_for_timeout``). Defaults to ``time.sleep``.

    Returns:
        True if the condition was met before the deadline, else False.
    """
    sleep = sleep or _default_sleep
    deadline = time.monotonic() + timeout_ms / 1000
    while True:
        try:
            if condition():
                return True
        except PlaywrightError as exc:
            logger.debug("Poll condition raised %s; retrying", exc)
        if time.monotonic() >= deadline:
            return False
        sleep(interval_ms)


def is_visible(locator: Locator) -> bool:
    """Return locator visibility, treating Playwright errors as hidden."""
    try:
        return locator.is_visible()
    except PlaywrightError:
        return False


def try_click(locator: Locator, timeout_ms: float) -> bool:
    """
    Click ``locator``, retrying once with ``force=True`` if the click fails.

    Returns:
        True if either click went through.
    """
    try:
        locator.click(timeout=timeout_ms)
        return True
    except PlaywrightError:
        pass
    try:
        locator.click(timeout=timeout_ms, force=True)
        return True
    except PlaywrightError as exc:
        logger.debug("Force click failed: %s", exc)
        return False


def click_first_visible(
    candidates: Sequence[LocatorCandidate], timeout_ms: float
) -> int | None:
    """
    Click the first visible candidate in order.

    Candidates may be locators or zero-argument factories returning one, so
    callers can defer building expensive locators until they are needed.
    Invisible candidates and candidates whose click fails are skipped.

    Returns:
        Index of the clicked candidate, or None if nothing was clicked.
    """
    for index, candidate in enumerate(candidates):
        locator = candidate if isinstance(candidate, Locator) else candidate()
        if not is_visible(locator):
            continue
        if try_click(locator, timeout_ms):
            return index
    return None
