"""
Main Application Window
=======================
The primary GUI container: menu bar, the map canvas, the HUD and the
timeline bar.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects the timeline bar's requests to the playback
   controller, and the controller's invalidation signal back to every view.
"""
import logging

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QLabel, QMessageBox
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction

from diffusionmap.controller.playback import PlaybackController
from diffusionmap.model.entities import EntityRegistry
from diffusionmap.model.errors import DiffusionMapError
from diffusionmap.view.history_dialog import IntensityHistoryDialog
from diffusionmap.view.map_view import MapView
from diffusionmap.view.timeline_bar import TimelineBar


logger = logging.getLogger(__name__)

VISIBLE_APP_NAME = "江苏温病 · GIS 时空演化"


class MainWindow(QMainWindow):
    def __init__(self, controller: PlaybackController, registry: EntityRegistry) -> None:
        super().__init__()
        self.controller = controller
        self.registry = registry

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(900, 1000)

        # --- MAIN CONTAINER ---
        main_widget = QWidget()
        self.setCentralWidget(main_widget)

        main_layout = QVBoxLayout(main_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        # --- 1. MAP ---
        self.map_view = MapView(registry.list())
        main_layout.addWidget(self.map_view, stretch=1)

        # --- 2. HUD ---
        self.lbl_hud = QLabel()
        self.lbl_hud.setAlignment(Qt.AlignLeft | Qt.AlignVCenter)
        self.lbl_hud.setStyleSheet("QLabel { padding: 4px 8px; font-family: monospace; }")
        main_layout.addWidget(self.lbl_hud)

        # --- 3. TIMELINE ---
        self.timeline = TimelineBar()
        main_layout.addWidget(self.timeline)

        # --- SIGNAL CONNECTIONS ---
        # 1. User requests -> controller
        self.timeline.play_toggled.connect(self.controller.toggle_play)
        self.timeline.seek_requested.connect(self.controller.seek)
        self.timeline.layer_requested.connect(self.controller.set_layer)
        self.timeline.interval_requested.connect(self.on_interval_requested)
        self.timeline.history_requested.connect(self.on_history_requested)

        # 2. Controller -> views
        self.controller.snapshot_invalidated.connect(self.refresh)
        self.controller.playing_changed.connect(self.timeline.set_playing)

        # 3. Hover -> status bar
        self.map_view.entity_hovered.connect(self.on_entity_hovered)

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()

        # Initial Render
        self.refresh()

    def _create_actions(self) -> None:
        self.act_play = QAction("播放 / 暂停", self)
        self.act_play.setShortcut("Space")
        self.act_play.triggered.connect(self.controller.toggle_play)

        self.act_history = QAction("强度历史...", self)
        self.act_history.setShortcut("Ctrl+H")
        self.act_history.triggered.connect(self.on_history_requested)

        self.act_exit = QAction("退出", self)
        self.act_exit.triggered.connect(self.close)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&文件")
        file_menu.addAction(self.act_exit)

        view_menu = menu_bar.addMenu("&视图")
        view_menu.addAction(self.act_play)
        view_menu.addSeparator()
        view_menu.addAction(self.act_history)

    # --- SLOTS ---

    def refresh(self) -> None:
        """Pull a fresh snapshot and push it to every view."""
        snapshot = self.controller.snapshot()
        self.map_view.show_snapshot(snapshot)
        self.timeline.show_snapshot(snapshot)
        self.lbl_hud.setText(
            f"活跃节点 {snapshot.active_count} / {len(self.registry)}    "
            f"传播路径 {len(snapshot.active_edges)}"
        )

    def on_interval_requested(self, interval_ms: int) -> None:
        try:
            self.controller.set_tick_interval(interval_ms)
        except ValueError as e:
            logger.warning(f"Rejected tick interval: {e}")

    def on_entity_hovered(self, key: str) -> None:
        if not key:
            self.statusBar().clearMessage()
            return
        try:
            entity = self.registry.get(key)
        except DiffusionMapError as e:
            logger.exception("Hover reported an entity that is not registered")
            QMessageBox.critical(self, "错误", f"未知节点:\n{str(e)}")
            return
        snapshot = self.controller.snapshot()
        self.statusBar().showMessage(
            f"{entity.name}  {snapshot.subtitle(entity)}  强度 {snapshot.intensity_of(key):.2f}"
        )

    def on_history_requested(self) -> None:
        try:
            dialog = IntensityHistoryDialog(
                entities=self.registry.list(),
                model=self.controller.builder.intensity_model,
                layer=self.controller.layer,
                current_year=self.controller.current_time,
                parent=self,
            )
            dialog.exec()
        except DiffusionMapError as e:
            logger.exception("Failed to open intensity history dialog")
            QMessageBox.critical(self, "错误", f"无法打开强度历史:\n{str(e)}")

    def closeEvent(self, event, /) -> None:
        """Stop the playback timer before the window goes away."""
        self.controller.teardown()
        event.accept()
