"""Playwright fixtures for the storefront E2E tests."""

from __future__ import annotations

import logging
import os
import re
import shutil
from collections.abc import Generator
from pathlib import Path

import pytest
from playwright.sync_api import Browser, BrowserContext, Page

from config import Config, get_config
from shared.banner import hide_banner_by_css
from shared.live_site import live_site_url
from shared.test_data import Credentials, VehicleData, load_credentials, load_vehicle_catalog
from tests.e2e.pages.auth_page import AuthPage
from tests.e2e.pages.home_page import HomePage
from tests.e2e.pages.vehicle_page import VehiclePage

logger = logging.getLogger(__name__)


def _artifact_dir(results_dir: Path, nodeid: str) -> Path:
    return results_dir / "artifacts" / re.sub(r"[^\w.-]+", "_", nodeid).strip("_")


def _test_failed(item: pytest.Item) -> bool:
    report = getattr(item, "rep_call", None)
    return report is None or report.failed


@pytest.fixture(scope="session")
def env_config() -> type[Config]:
    """Configuration class for the ENV / TEST_ENV environment."""
    return get_config()


@pytest.fixture(scope="session")
def site_url(site: str, env_config: type[Config]) -> str:
    """Reachable storefront URL for the parametrised site; skips when offline."""
    return live_site_url(site, suite_name="E2E", env=env_config.ENV)


@pytest.fixture(scope="session")
def credentials(env_config: type[Config]) -> Credentials:
    return load_credentials(env_config.CREDENTIALS_FILE)


@pytest.fixture(scope="session")
def vehicle_catalog(env_config: type[Config]) -> dict[str, VehicleData]:
    return load_vehicle_catalog(env_config.VEHICLES_FILE)


@pytest.fixture(scope="session")
def browser_context_args(env_config: type[Config]) -> dict:
    return {
        "viewport": env_config.VIEWPORT,
        "ignore_https_errors": True,
        "permissions": env_config.PERMISSIONS,
        "geolocation": env_config.GEOLOCATION,
    }


@pytest.fixture(scope="session")
def browser_type_launch_args(browser_type_launch_args: dict, env_config: type[Config]) -> dict:
    """pytest-playwright launch options with the HEADLESS default applied."""
    return env_config.browser_launch_args(**browser_type_launch_args)


@pytest.fixture(scope="function")
def context(
    site_url: str,
    site: str,
    browser: Browser,
    browser_context_args: dict,
    env_config: type[Config],
    request: pytest.FixtureRequest,
) -> Generator[BrowserContext, None, None]:
    """
    Fresh context per test, restoring the site's saved session when present.

    Video and trace are recorded for every test and kept only on failure.
    """
    artifact_dir = _artifact_dir(env_config.RESULTS_DIR, request.node.nodeid)
    video_dir = artifact_dir / "video"
    storage_state = env_config.storage_state_path(site)
    if storage_state.exists():
        logger.info("Restoring saved session from %s", storage_state)

    context = browser.new_context(
        **browser_context_args,
        base_url=site_url,
        storage_state=str(storage_state) if storage_state.exists() else None,
        record_video_dir=str(video_dir),
    )
    context.set_default_timeout(env_config.ACTION_TIMEOUT_MS)
    context.tracing.start(screenshots=True, snapshots=True)

    yield context

    failed = _test_failed(request.node)
    if failed:
        artifact_dir.mkdir(parents=True, exist_ok=True)
        context.tracing.stop(path=str(artifact_dir / "trace.zip"))
    else:
        context.tracing.stop()
    context.close()
    if not failed:
        shutil.rmtree(artifact_dir, ignore_errors=True)


@pytest.fixture(scope="function")
def page(context: BrowserContext) -> Generator[Page, None, None]:
    """New tab with the promo-banner CSS guard installed."""
    page = context.new_page()
    hide_banner_by_css(page)
    yield page
    page.close()


@pytest.fixture
def auth_page(page: Page, site_url: str, credentials: Credentials) -> AuthPage:
    return AuthPage(page, credentials, site_url)


@pytest.fixture
def home_page(page: Page, site_url: str) -> HomePage:
    return HomePage(page, site_url)


@pytest.fixture
def vehicle_page(page: Page, site_url: str) -> VehiclePage:
    return VehiclePage(page, site_url)


@pytest.fixture
def logged_in(auth_page: AuthPage) -> AuthPage:
    """Sign in (or reuse the saved session) before the test body runs."""
    auth_page.login()
    return auth_page


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Keep phase reports on the item and capture a screenshot on UI test failure."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)

    if report.when == "call" and report.failed:
        page = item.funcargs.get("page")
        if page:
            screenshot_dir = "test-results/screenshots"
            os.makedirs(screenshot_dir, exist_ok=True)
            test_name = re.sub(r"[^\w.-]+", "_", item.name)
            screenshot_path = f"{screenshot_dir}/{test_name}.png"
            try:
                page.screenshot(path=screenshot_path, full_page=True)
                print(f"\nScreenshot saved: {screenshot_path}")
            except Exception as exc:  # pragma: no cover - best effort logging
                print(f"\nFailed to capture screenshot: {exc}")
