"""
End-to-end test package for the storefronts.

This package contains Playwright-based browser tests and demonstrates:
- Page Object Model (POM) pattern
- Role-based locators with ordered fallbacks for unstable markup
- Saved-session reuse across tests
- User flow testing (sign-in, search, vehicle selection)
"""
