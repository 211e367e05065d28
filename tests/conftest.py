import logging
import os

import pytest

from diffusionmap.controller.playback import PlaybackController
from diffusionmap.controller.scheduler import ManualTickScheduler
from diffusionmap.model.entities import REGISTRY
from diffusionmap.model.state import PlaybackState

# Widgets are built without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture
def registry():
    return REGISTRY


@pytest.fixture
def scheduler():
    return ManualTickScheduler()


@pytest.fixture
def controller(scheduler):
    ctrl = PlaybackController(state=PlaybackState(), scheduler=scheduler)
    yield ctrl
    ctrl.teardown()


class SignalRecorder:
    """Collects every emission of the controller's signals."""

    def __init__(self, controller: PlaybackController) -> None:
        self.times: list[int] = []
        self.playing: list[bool] = []
        self.layers: list[str] = []
        self.invalidations = 0
        controller.time_changed.connect(lambda year: self.times.append(year))
        controller.playing_changed.connect(lambda flag: self.playing.append(flag))
        controller.layer_changed.connect(lambda layer: self.layers.append(layer))
        controller.snapshot_invalidated.connect(self._on_invalidated)

    def _on_invalidated(self) -> None:
        self.invalidations += 1


@pytest.fixture
def recorder(controller):
    return SignalRecorder(controller)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """setup_logging() binds handlers to the stdout of the test that called it."""
    yield
    logger = logging.getLogger("diffusionmap")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication
    app = QApplication.instance() or QApplication([])
    yield app
