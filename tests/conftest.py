"""Shared pytest fixtures: offscreen Qt, the application object, event pumping."""

from __future__ import annotations

import os
import sys
import time
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

# Headless Linux runners have no display server.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


def _is_ui_test(request: pytest.FixtureRequest) -> bool:
    return "ui" in Path(str(request.node.fspath)).parts


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Singleton QApplication shared by every Qt test."""
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def wait_until(qapp: object) -> Callable[..., bool]:
    """Pump the Qt event loop until *predicate* holds or *timeout* expires."""
    del qapp
    from PyQt6.QtTest import QTest

    def wait(predicate: Callable[[], bool], timeout: float = 5.0) -> bool:
        deadline = time.monotonic() + timeout
        while not predicate():
            if time.monotonic() >= deadline:
                return False
            QTest.qWait(20)
        return True

    return wait


@pytest.fixture(autouse=True)
def _close_top_level_widgets(
    request: pytest.FixtureRequest,
) -> Iterator[None]:
    """Close windows a UI test left open so later tests start clean."""
    if not _is_ui_test(request):
        yield
        return

    app = request.getfixturevalue("qapp")
    yield

    for widget in list(app.topLevelWidgets()):
        widget.close()
    app.processEvents()
