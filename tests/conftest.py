"""Shared fixtures for image_pixelator tests."""

import logging
import os
import random

import pytest
from PIL import Image

# Qt widgets need a platform plugin; tests never open real windows
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


def make_image(width: int, height: int, seed: int = 7) -> Image.Image:
    """Opaque RGBA image where neighbouring pixels differ."""
    rng = random.Random(seed)
    data = bytes(
        value
        for _ in range(width * height)
        for value in (rng.randrange(256), rng.randrange(256), rng.randrange(256), 255)
    )
    return Image.frombytes("RGBA", (width, height), data)


@pytest.fixture
def image_factory():
    return make_image


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def app_settings(tmp_path):
    from image_pixelator.settings import AppSettings

    return AppSettings(settings_file=tmp_path / "settings.ini")


@pytest.fixture
def restore_root_logging():
    """Put root logger handlers back after a test calls setup_logging()."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
