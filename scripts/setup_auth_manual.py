"""
Manual sign-in that saves a session snapshot per storefront.

Opens a visible browser on each storefront and waits for a person to sign
in by hand. The password field is focused as soon as it shows up, in the
page or in an embedded sign-in frame. Once the profile button appears the
storage state is written to ``storage/auth-<site>.json``.

Usage:
    python -m scripts.setup_auth_manual --site parts
"""

from __future__ import annotations

import argparse
import logging
import re

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page, sync_playwright

from config import ENVIRONMENTS, SITES, Config, get_config, get_env
from shared import waits
from shared.polling import is_visible
from shared.test_data import load_credentials
from scripts.setup_auth import EXIT_FAILED, EXIT_OK, sites_for

logger = logging.getLogger(__name__)

# Makes the window look less like an automated browser to the sign-in service.
BROWSER_ARGS = [
    "--disable-blink-features=AutomationControlled",
    "--no-first-run",
    "--no-default-browser-check",
]

PASSWORD_NAME = re.compile("password", re.IGNORECASE)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for the manual session setup script."""
    parser = argparse.ArgumentParser(
        description="Open the storefronts for a manual sign-in and save session snapshots."
    )
    parser.add_argument("--site", choices=[*SITES, "all"], default="all")
    parser.add_argument("--env", choices=ENVIRONMENTS, default=None)
    return parser.parse_args(argv)


def launch_headed_browser(playwright):
    """Launch installed Chrome, falling back to the bundled Chromium."""
    try:
        return playwright.chromium.launch(headless=False, channel="chrome", args=BROWSER_ARGS)
    except PlaywrightError as exc:
        logger.info("Chrome channel unavailable (%s); using bundled Chromium", exc)
        return playwright.chromium.launch(headless=False, args=BROWSER_ARGS[:1])


def focus_password_field(page: Page) -> bool:
    """
    Focus the first visible password textbox in the page or any frame.

    Returns:
        True if a field was focused.
    """
    for frame in page.frames:
        field = frame.get_by_role("textbox", name=PASSWORD_NAME).first
        if not is_visible(field):
            continue
        try:
            field.focus()
            field.click()
        except PlaywrightError as exc:
            logger.debug("Could not focus password field: %s", exc)
            continue
        return True
    return False


def wait_for_manual_login(page: Page, profile_name: str) -> None:
    """
    Wait for the person at the keyboard to finish signing in.

    While waiting, focuses the password field once it appears so the user
    can type straight away.

    Raises:
        playwright.sync_api.TimeoutError: If the profile button is not
            visible within the manual sign-in window.
    """
    profile_button = page.get_by_role("button", name=profile_name).first
    password_focused = False
    waited_ms = 0

    for _ in range(waits.SETUP_PASSWORD_FOCUS_ATTEMPTS):
        if is_visible(profile_button):
            return
        if not password_focused and focus_password_field(page):
            logger.info("Password field focused; type your password")
            password_focused = True
        page.wait_for_timeout(waits.SETUP_POST_GOTO_MS)
        waited_ms += waits.SETUP_POST_GOTO_MS
        if password_focused:
            break

    remaining_ms = max(waits.SETUP_MANUAL_LOGIN_MS - waited_ms, 0)
    profile_button.wait_for(state="visible", timeout=remaining_ms)


def setup_auth_manual(playwright, env_config: type[Config], site: str) -> None:
    """Open ``site`` for a manual sign-in and save the resulting storage state."""
    site_url = env_config.base_url(site)
    profile_name = load_credentials(env_config.CREDENTIALS_FILE).profile_name
    storage_path = env_config.storage_state_path(site)

    browser = launch_headed_browser(playwright)
    try:
        context = browser.new_context(viewport=env_config.VIEWPORT, ignore_https_errors=True)
        page = context.new_page()

        logger.info("Manual auth setup for %s (%s); sign in within 3 minutes", site, site_url)
        page.goto(site_url, wait_until="load", timeout=waits.NAV_TIMEOUT_MS)

        wait_for_manual_login(page, profile_name)
        page.wait_for_timeout(waits.SETUP_POST_PROFILE_MS)

        context.storage_state(path=str(storage_path))
        logger.info("Auth state saved to %s", storage_path)
    finally:
        browser.close()


def main(argv: list[str] | None = None) -> int:
    """
    Entry point: run the manual sign-in for each selected storefront.

    Returns:
        ``EXIT_OK`` (0) when every site was saved, ``EXIT_FAILED`` (1)
        otherwise.
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
                setup_auth_manual(playwright, env_config, site)
    except (PlaywrightError, OSError, ValueError) as exc:
        logger.error("Manual setup failed: %s", exc)
        return EXIT_FAILED

    logger.info("Manual auth setup complete; run: pytest")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
