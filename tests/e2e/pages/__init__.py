"""
Page Object Model (POM) classes for the storefront E2E suite.

This package contains page objects that encapsulate page-specific
locators and interactions:
- AuthPage: account menu, sign-in form, saved-session detection
- HomePage: search bar and selected-vehicle card
- VehiclePage: the Add Vehicle wizard
"""

from tests.e2e.pages.auth_page import AuthPage
from tests.e2e.pages.base_page import BasePage
from tests.e2e.pages.home_page import HomePage
from tests.e2e.pages.vehicle_page import VehiclePage

__all__ = ["AuthPage", "BasePage", "HomePage", "VehiclePage"]
