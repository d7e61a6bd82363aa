"""
Programmatic sign-in that saves a session snapshot per storefront.

Runs the same AuthPage.login flow the tests use, then writes the browser
context's storage state to ``storage/auth-<site>.json``. Tests that find
the snapshot start already signed in and skip the sign-in form.

The GM identity service sometimes rejects automated sign-in (HTTP 403);
use ``python -m scripts.setup_auth_manual`` when that happens.

Usage:
    python -m scripts.setup_auth --site all
"""

from __future__ import annotations

import argparse
import logging
import sys

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from config import ENVIRONMENTS, SITES, Config, get_config, get_env, get_site
from shared import waits
from shared.polling import is_visible
from shared.test_data import load_credentials
from tests.e2e.pages.auth_page import AuthPage

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for the session setup script."""
    parser = argparse.ArgumentParser(
        description="Sign in to the Chevrolet storefronts and save session snapshots."
    )
    parser.add_argument(
        "--site",
        choices=[*SITES, "all"],
        default="all",
        help="Storefront to set up (default: all)",
    )
    parser.add_argument(
        "--env",
        choices=ENVIRONMENTS,
        default=None,
        help="Target environment (default: $ENV / $TEST_ENV or prod)",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run the browser without a window",
    )
    return parser.parse_args(argv)


def sites_for(choice: str | None) -> list[str]:
    """Expand ``all`` into every storefront."""
    choice = choice or get_site()
    return list(SITES) if choice == "all" else [choice]


def setup_auth(playwright, env_config: type[Config], site: str, headless: bool = False) -> None:
    """
    Sign in to one storefront and save its storage state.

    Raises:
        playwright.sync_api.Error: If navigation or the sign-in flow fails.
        AssertionError: If the profile button never appears during login.
    """
    base_url = env_config.base_url(site)
    credentials = load_credentials(env_config.CREDENTIALS_FILE)
    storage_path = env_config.storage_state_path(site)

    browser = playwright.chromium.launch(headless=headless)
    try:
        context = browser.new_context(
            viewport=env_config.VIEWPORT,
            ignore_https_errors=True,
            base_url=base_url,
        )
        page = context.new_page()

        logger.info("Setting up auth for %s/%s", env_config.ENV, site)
        auth_page = AuthPage(page, credentials, base_url)
        auth_page.login()
        page.wait_for_timeout(waits.SETUP_POST_LOGIN_MS)

        context.storage_state(path=str(storage_path))
        logger.info("Auth state saved to %s", storage_path)

        if not is_visible(auth_page.profile_button):
            logger.warning("Profile button not visible after login for %s", site)
    finally:
        browser.close()


def main(argv: list[str] | None = None) -> int:
    """
    Entry point: set up a snapshot for each selected storefront.

    Returns:
        ``EXIT_OK`` (0) when every site was saved, ``EXIT_FAILED`` (1)
        as soon as one fails.
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = parse_args(argv)
    env_config = get_config(args.env or get_env())
    env_config.STORAGE_DIR.mkdir(parents=True, exist_ok=True)

    try:
        with sync_playwright() as playwright:
            for site in sites_for(args.site):
                setup_auth(playwright, env_config, site, headless=args.headless)
    except (PlaywrightError, AssertionError, OSError, ValueError) as exc:
        logger.error("Auth setup failed: %s", exc)
        print("Try: python -m scripts.setup_auth_manual", file=sys.stderr)
        return EXIT_FAILED

    logger.info("Auth setup complete")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
