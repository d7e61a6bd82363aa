"""
Smoke-test fixtures for the Chevrolet storefronts.

Provides the ``smoke_base_url`` session-scoped fixture that yields a
reachable storefront URL for each selected site. URL resolution is
delegated to :func:`shared.live_site.live_site_url`, which honours
TEST_BASE_URL and skips the suite when the storefront cannot be reached.

Key SDET Concepts Demonstrated:
- Session-scoped URL fixtures shared across all smoke tests
- Delegating reachability checks to a shared helper reused by the E2E suite
"""

from __future__ import annotations

import pytest

from shared.live_site import live_site_url


@pytest.fixture(scope="session")
def smoke_base_url(site: str) -> str:
    """Return a reachable storefront URL for smoke tests."""
    return live_site_url(site, suite_name="smoke")
