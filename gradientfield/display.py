"""
gradientfield/display.py
Primary screen geometry via Qt

Used to pick a default canvas that fills the screen. Returns None rather
than failing when there is no display to ask (headless boxes, CI).
"""

import logging
import os
import sys
from typing import Optional, Tuple

log = logging.getLogger(__name__)

_DISPLAY_ENV_VARS = ("DISPLAY", "WAYLAND_DISPLAY")


def has_display() -> bool:
    """Whether a Qt GUI connection can be attempted without aborting."""
    if os.environ.get("QT_QPA_PLATFORM") == "offscreen":
        return True
    if sys.platform.startswith("linux") or "bsd" in sys.platform:
        return any(os.environ.get(name) for name in _DISPLAY_ENV_VARS)
    return True


def _query_primary_screen() -> Optional[Tuple[int, int]]:
    from PyQt5.QtGui import QGuiApplication

    app = QGuiApplication.instance()
    if app is None:
        app = QGuiApplication([sys.argv[0] if sys.argv else "gradientfield"])
    screen = app.primaryScreen()
    if screen is None:
        return None
    geometry = screen.geometry()
    return geometry.width(), geometry.height()


def detect_screen_size() -> Optional[Tuple[int, int]]:
    """
    Size of the primary screen in pixels.

    Returns:
        (width, height), or None when no usable display is available
    """
    if not has_display():
        log.debug("No display available, skipping screen size detection")
        return None
    size = _query_primary_screen()
    if size is None or size[0] <= 0 or size[1] <= 0:
        log.warning("Invalid screen size reported: %s", size)
        return None
    log.debug("Detected screen size %dx%d", *size)
    return size
