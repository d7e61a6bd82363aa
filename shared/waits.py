"""
Centralised timeouts and delays for the suite (milliseconds).

Page objects, fixtures and setup scripts read these instead of hardcoding
numbers so that tuning happens in one place.
"""

# Navigation: page load / goto.
NAV_TIMEOUT_MS = 30_000

# General action timeout (click, fill).
ACTION_TIMEOUT_MS = 15_000

# Short step timeout (dropdown click, option select).
STEP_TIMEOUT_MS = 10_000

# Visibility / assertion timeout.
VISIBILITY_TIMEOUT_MS = 15_000

# Shorter visibility for dropdown options.
OPTION_VISIBILITY_MS = 5_000

# Banner dismiss: wait for close button and post-dismiss settle.
BANNER_CLOSE_TIMEOUT_MS = 10_000
BANNER_AFTER_CLICK_MS = 600
BANNER_AFTER_FALLBACK_MS = 500
BANNER_AFTER_ESCAPE_MS = 300
BANNER_FINAL_SETTLE_MS = 400
BANNER_BACKDROP_CLICK_MS = 2_000

# Vehicle flow: delay after opening Add Vehicle / between dropdown steps.
VEHICLE_AFTER_ADD_BTN_MS = 300
VEHICLE_AFTER_YEAR_MS = 300
VEHICLE_AFTER_MODEL_MS = 500
VEHICLE_AFTER_BODY_MS = 400
VEHICLE_AFTER_BODY_SKIP_MS = 300
VEHICLE_BODY_CLICK_MS = 6_000
VEHICLE_PAGE_READY_SETTLE_MS = 400
VEHICLE_CATEGORIES_URL_TIMEOUT_MS = 15_000

# Auth: retry delay after failed goto; short poll/settle.
AUTH_GOTO_RETRY_MS = 2_000
AUTH_POLL_MS = 400
AUTH_POLL_DEADLINE_MS = 8_000
AUTH_AFTER_CLICK_MS = 500
AUTH_MODAL_WAIT_MS = 300
AUTH_PROFILE_VISIBLE_MS = 15_000
AUTH_SIGNOUT_VISIBLE_MS = 10_000
AUTH_SIGNIN_BUTTON_MS = 8_000
AUTH_BLOCKING_MODAL_MS = 5_000
AUTH_BLOCKING_MODAL_RECHECK_MS = 3_000

# Home: verify loaded, vehicle present/removed, search complete.
HOME_LOADED_MS = 15_000
HOME_VEHICLE_MS = 10_000
HOME_SEARCH_COMPLETE_MS = 10_000

# Setup scripts: post-goto and post-login settle, manual login window.
SETUP_POST_GOTO_MS = 2_000
SETUP_POST_PROFILE_MS = 2_000
SETUP_POST_LOGIN_MS = 2_000
SETUP_MANUAL_LOGIN_MS = 180_000
SETUP_PASSWORD_FOCUS_ATTEMPTS = 60
