"""
Promo banner handling for the Chevrolet storefronts.

The storefronts open a marketing modal shortly after load that blocks
clicks on the header and the Add Vehicle button. ``dismiss_banner`` closes
it with a chain of fallbacks; ``hide_banner_by_css`` is a backup that hides
known modal containers before any page script runs.

Set BANNER_CLOSE_SELECTOR to add a custom close selector to the chain.
"""

from __future__ import annotations

import json
import logging
import re

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator, Page

from config import banner_close_selector
from shared import waits
from shared.polling import click_first_visible, is_visible, try_click

logger = logging.getLogger(__name__)

# Read once at import; the override is start-of-process configuration.
BANNER_CLOSE_SELECTOR = banner_close_selector()

PRIMARY_CLOSE_SELECTOR = ".q-close-modal-button"

MODAL_HEADER_CLOSE_SELECTORS = (
    ".modal-header .q-close-modal-button",
    '.modal-header button[aria-label="Close"]',
    '.modal-header button[aria-label="close"]',
    ".modal-header .close",
    ".modal-header svg",
    ".svg-inline--fa.fa-times-circle",
)

OPEN_MODAL_SELECTOR = '.modal.show, [role="dialog"].show'
BACKDROP_SELECTOR = ".modal-backdrop, .modal-backdrop.show"

_CLOSE_NAME_PATTERN = re.compile(r"\b(close|dismiss)\b|^x$", re.IGNORECASE)

HIDDEN_MODAL_SELECTOR = (
    '.modal.show, .modal-backdrop.show, #MarketingPromoPopup, '
    '[role="dialog"].modal.show, .fade.modal.show'
)

# Runs in every document before page scripts.
_HIDE_BANNER_SCRIPT = """
(() => {
  const sel = %(selector)s;
  const id = 'playwright-hide-promo-banner';
  if (document.getElementById(id)) return;
  const hideAll = () => {
    document.querySelectorAll(sel).forEach((el) => {
      el.style.setProperty('display', 'none', 'important');
      el.style.setProperty('pointer-events', 'none', 'important');
    });
  };
  const style = document.createElement('style');
  style.id = id;
  style.textContent = `${sel} { display: none !important; visibility: hidden !important; pointer-events: none !important; }`;
  document.documentElement.appendChild(style);
  hideAll();
  const root = document.body || document.documentElement;
  if (root) {
    new MutationObserver(hideAll).observe(root, { childList: true, subtree: true });
  }
})();
"""


def _fallback_close_controls(page: Page) -> list:
    return [
        lambda: page.locator(f"#MarketingPromoPopup {PRIMARY_CLOSE_SELECTOR}").first,
        lambda: page.locator(", ".join(MODAL_HEADER_CLOSE_SELECTORS)).first,
        lambda: page.get_by_role("button", name=_CLOSE_NAME_PATTERN).first,
    ]


def _close_primary(page: Page) -> None:
    close_button: Locator = page.locator(PRIMARY_CLOSE_SELECTOR).first
    try:
        close_button.wait_for(state="visible", timeout=waits.BANNER_CLOSE_TIMEOUT_MS)
    except PlaywrightError:
        logger.debug("No promo banner close button appeared")
        return
    if try_click(close_button, waits.OPTION_VISIBILITY_MS):
        page.wait_for_timeout(waits.BANNER_AFTER_CLICK_MS)


def _close_custom(page: Page, selector: str) -> None:
    custom = page.locator(selector).first
    if not is_visible(custom):
        return
    try:
        custom.click(timeout=waits.BANNER_CLOSE_TIMEOUT_MS)
    except PlaywrightError as exc:
        logger.debug("Custom banner selector %r not clickable: %s", selector, exc)
    page.wait_for_timeout(waits.BANNER_AFTER_FALLBACK_MS)


def _escape_open_modal(page: Page) -> None:
    if not is_visible(page.locator(OPEN_MODAL_SELECTOR).first):
        return
    try:
        page.keyboard.press("Escape")
    except PlaywrightError:
        pass
    page.wait_for_timeout(waits.BANNER_AFTER_ESCAPE_MS)
    try_click(page.locator(BACKDROP_SELECTOR).first, waits.BANNER_BACKDROP_CLICK_MS)


def dismiss_banner(page: Page) -> None:
    """
    Close the promo modal if it is open. Safe to call when there is none.

    Order: primary close button, BANNER_CLOSE_SELECTOR override, ordered
    fallback close controls (first visible wins), then Escape plus a
    backdrop click. Call after ``goto`` so the modal has time to render.
    """
    _close_primary(page)

    if BANNER_CLOSE_SELECTOR:
        _close_custom(page, BANNER_CLOSE_SELECTOR)

    if click_first_visible(_fallback_close_controls(page), waits.OPTION_VISIBILITY_MS) is not None:
        page.wait_for_timeout(waits.BANNER_AFTER_FALLBACK_MS)

    _escape_open_modal(page)
    page.wait_for_timeout(waits.BANNER_FINAL_SETTLE_MS)


def hide_banner_by_css(page: Page) -> None:
    """Install an init script that hides promo modals and backdrops on load."""
    page.add_init_script(_HIDE_BANNER_SCRIPT % {"selector": json.dumps(HIDDEN_MODAL_SELECTOR)})
