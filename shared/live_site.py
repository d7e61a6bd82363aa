"""Shared storefront reachability helpers for smoke and E2E test suites."""

from __future__ import annotations

import logging
import os
import time

import pytest
import requests

from config import get_config

logger = logging.getLogger(__name__)

# Desktop UA; the storefront CDN rejects the default python-requests agent.
PROBE_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
}


def is_site_reachable(url: str, timeout: int = 5) -> bool:
    """Return True when the storefront answers with any non-5xx HTTP status."""
    try:
        response = requests.get(url, headers=PROBE_HEADERS, timeout=timeout)
    except requests.RequestException as exc:
        logger.debug("Probe of %s failed: %s", url, exc)
        return False
    return response.status_code < 500


def wait_for_site(url: str, timeout: int = 30, interval: int = 2) -> None:
    """Poll the storefront until it responds or raise after ``timeout`` seconds."""
    deadline = time.time() + timeout
    while time.time() < deadline:
        if is_site_reachable(url):
            return
        time.sleep(interval)
    raise RuntimeError(f"Storefront at {url} not reachable after {timeout}s")


def live_site_url(site: str, *, suite_name: str, env: str | None = None) -> str:
    """
    Return a reachable storefront base URL for ``site``.

    Priority:
    1. Use an explicit base URL from TEST_BASE_URL (and wait for it).
    2. Probe the configured storefront for the environment.
    3. Skip the calling test when the storefront cannot be reached, so the
       suite degrades cleanly on machines without outbound network access.
    """
    provided_base_url = os.getenv("TEST_BASE_URL")
    if provided_base_url:
        wait_for_site(provided_base_url)
        return provided_base_url

    base_url = get_config(env).base_url(site)
    if not is_site_reachable(base_url):
        pytest.skip(f"{base_url} is not reachable; {suite_name} tests need network access")
    return base_url
