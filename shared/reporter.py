"""
Failure reporter plugin.

Prints every failing test with its site project and error message as soon
as it fails, then writes a plain-text failure summary to a log file and
the terminal at the end of the run. Nothing is written when every test
passed.

Registered from ``tests/conftest.py``; the log path can be overridden with
``--failures-log``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest

logger = logging.getLogger(__name__)

DEFAULT_FAILURES_LOG = Path("test-results") / "failures.log"
SEPARATOR = "=" * 60
UNKNOWN_PROJECT = "unknown"


@dataclass
class FailureRecord:
    """One failing test phase."""

    project: str
    title: str
    error: str
    file: str | None = None

    def format(self) -> str:
        text = f"[{self.project}] {self.title}\n  {_indent(self.error)}"
        if self.file:
            text += f"\n  File: {self.file}"
        return text


def _indent(text: str) -> str:
    return text.replace("\n", "\n  ")


def project_label(item: Any) -> str:
    """
    Return the browser project for a test item, e.g. ``chromium-parts``.

    Items parametrised with a ``site`` get ``<browser>-<site>``; anything
    else is ``unknown``.
    """
    callspec = getattr(item, "callspec", None)
    site = callspec.params.get("site") if callspec is not None else None
    if not site:
        return UNKNOWN_PROJECT
    browser_name = (
        callspec.params.get("browser_name")
        or _first_option(item, "browser")
        or "chromium"
    )
    return f"{browser_name}-{site}"


def _first_option(item: Any, name: str) -> str | None:
    try:
        value = item.config.getoption(name)
    except (AttributeError, ValueError):
        return None
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def is_timeout(excinfo: Any) -> bool:
    """True when pytest-timeout aborted the test (``Failed: Timeout >Ns``)."""
    return excinfo.errisinstance(pytest.fail.Exception) and str(excinfo.value).startswith("Timeout")


def error_message(report: Any, excinfo: Any = None) -> str:
    """Summarise why a test phase failed."""
    if excinfo is not None:
        if is_timeout(excinfo):
            return "Test timed out."
        return excinfo.exconly()
    longrepr = getattr(report, "longreprtext", "")
    if longrepr:
        return longrepr
    return f"Status: {report.outcome}"


class FailureReporter:
    """Collects failing tests and writes the failure summary."""

    def __init__(self, log_path: Path = DEFAULT_FAILURES_LOG):
        self.log_path = Path(log_path)
        self.failures: list[FailureRecord] = []
        self._failed_nodeids: set[str] = set()
        self._terminal = None

    # -------------------------------------------------------------------------
    # Recording
    # -------------------------------------------------------------------------

    def record(self, report: Any, project: str, excinfo: Any = None) -> FailureRecord | None:
        """
        Record ``report`` if it is the first failing phase of its test.

        Passed and skipped phases are ignored. A test that already failed
        (e.g. in call) is not recorded again when its teardown also fails.
        Returns the record that was added, if any.
        """
        if not report.failed or report.nodeid in self._failed_nodeids:
            return None

        title = report.nodeid.split("::")[-1]
        if report.when != "call":
            title = f"{title} ({report.when})"

        failure = FailureRecord(
            project=project,
            title=title,
            error=error_message(report, excinfo),
            file=report.location[0] if getattr(report, "location", None) else None,
        )
        self.failures.append(failure)
        self._failed_nodeids.add(report.nodeid)

        logger.debug("[FAIL] [%s] %s", failure.project, failure.title)
        if self._terminal is not None:
            self._terminal.write_line(f"[FAIL] [{failure.project}] {failure.title}", red=True)
            self._terminal.write_line(f"  {_indent(failure.error)}")
        return failure

    def summary(self) -> str:
        lines = [
            SEPARATOR,
            f"Failure summary ({len(self.failures)} test(s))",
            SEPARATOR,
            *(failure.format() for failure in self.failures),
            "",
        ]
        return "\n".join(lines)

    def write_log(self) -> Path | None:
        """Write the summary file; returns its path, or None when nothing failed."""
        if not self.failures:
            return None
        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self.log_path.write_text(self.summary(), encoding="utf-8")
        return self.log_path

    # -------------------------------------------------------------------------
    # Pytest hooks
    # -------------------------------------------------------------------------

    def pytest_sessionstart(self, session) -> None:
        self.failures = []
        self._failed_nodeids = set()
        self._terminal = session.config.pluginmanager.get_plugin("terminalreporter")

    @pytest.hookimpl(hookwrapper=True)
    def pytest_runtest_makereport(self, item, call):
        outcome = yield
        report = outcome.get_result()
        self.record(report, project_label(item), call.excinfo)

    def pytest_sessionfinish(self, session, exitstatus) -> None:
        path = self.write_log()
        if path is not None:
            logger.info("Failure summary written to %s", path)

    def pytest_terminal_summary(self, terminalreporter) -> None:
        if not self.failures:
            return
        terminalreporter.write_sep("=", "failure summary")
        terminalreporter.write_line(self.summary())
