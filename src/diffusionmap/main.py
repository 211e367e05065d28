"""
Application Initialization
==========================
Constructs the Model / Controller / View objects and starts the Qt event
loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Instantiates the playback controller (which owns the PlaybackState).
2. Instantiates the Main Window (View) with the controller and registry.
3. Keeps imports of Qt widgets out of the model so the model stays headless.
"""
import logging
import sys
from typing import Optional

from PySide6.QtWidgets import QApplication

from diffusionmap.config import DEFAULT_YEAR
from diffusionmap.controller.playback import PlaybackController
from diffusionmap.logging_config import setup_logging
from diffusionmap.model.entities import REGISTRY
from diffusionmap.model.layers import Layer, DEFAULT_LAYER
from diffusionmap.model.state import PlaybackState
from diffusionmap.view.main_window import MainWindow, VISIBLE_APP_NAME

logger = logging.getLogger(__name__)


def main(
    year: int = DEFAULT_YEAR,
    layer: Layer = DEFAULT_LAYER,
    log_level: int = logging.INFO,
    log_file: Optional[str] = None,
) -> int:
    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=log_level, log_file=log_file)

    # 2. Create the Qt Application
    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName(VISIBLE_APP_NAME)

    # 3. Initialize the Controller (the PlaybackState lives inside it)
    controller = PlaybackController(state=PlaybackState(), layer=layer)
    controller.seek(year)

    # 4. Initialize the Main Window
    window = MainWindow(controller, REGISTRY)
    window.show()

    # 5. Start Event Loop
    code = app.exec()
    controller.teardown()
    return code


if __name__ == "__main__":
    sys.exit(main())
