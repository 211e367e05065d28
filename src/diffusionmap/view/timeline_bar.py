"""
Timeline Bar
============
Playback controls under the map: layer toggle, year and era readout,
play button, scrub slider with era markers and playback speed.
"""
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QSlider, QStyle,
    QSpinBox, QButtonGroup, QSizePolicy
)
from PySide6.QtCore import Qt, Signal, QRectF
from PySide6.QtGui import QPainter, QColor, QBrush, QPen
import logging

from diffusionmap.config import MIN_YEAR, MAX_YEAR, TICK_INTERVAL_MS
from diffusionmap.model.eras import EraMarker
from diffusionmap.model.layers import Layer
from diffusionmap.model.snapshot import Snapshot


logger = logging.getLogger(__name__)

REACHED = QColor("#10b981")
PENDING = QColor("#475569")


class EraStrip(QWidget):
    """Thin strip with one dot per era breakpoint, lit once the cursor has passed it."""

    def __init__(self) -> None:
        super().__init__()
        self.markers: list[EraMarker] = []
        self.setMinimumHeight(10)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)

    def set_markers(self, markers: list[EraMarker]) -> None:
        """
        Replace the dots and their tooltip.

        Args:
            markers: One marker per era, in timeline order.
        """
        self.markers = list(markers)
        tips = [f"{m.era.label}: {m.era.description}" for m in self.markers]
        self.setToolTip("\n".join(tips))
        self.update()

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.setPen(QPen(Qt.NoPen))

        width = self.width() - 6
        cy = self.height() / 2
        for marker in self.markers:
            painter.setBrush(QBrush(REACHED if marker.reached else PENDING))
            cx = 3 + marker.fraction * width
            painter.drawEllipse(QRectF(cx - 3, cy - 3, 6, 6))
        painter.end()


class TimelineBar(QWidget):
    """
    Header + footer controls of the map: layer toggle, year / era readout,
    play button, scrub slider and playback speed.

    The bar never changes playback state itself; it only emits requests.
    """
    play_toggled = Signal()
    seek_requested = Signal(int)
    layer_requested = Signal(str)
    interval_requested = Signal(int)
    history_requested = Signal()

    def __init__(self) -> None:
        super().__init__()
        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 4, 8, 4)

        # --- Header: layers, readout, play ---
        header = QHBoxLayout()

        self.layer_buttons = QButtonGroup(self)
        self.layer_buttons.setExclusive(True)
        for layer in Layer:
            btn = QPushButton(layer.label)
            btn.setCheckable(True)
            btn.setProperty("layer", layer.value)
            self.layer_buttons.addButton(btn)
            header.addWidget(btn)
        self.layer_buttons.buttonClicked.connect(self._on_layer_clicked)

        self.btn_history = QPushButton("强度历史...")
        self.btn_history.clicked.connect(self.history_requested.emit)
        header.addWidget(self.btn_history)

        header.addStretch()

        readout = QVBoxLayout()
        self.lbl_year = QLabel("-")
        self.lbl_year.setAlignment(Qt.AlignRight)
        self.lbl_year.setStyleSheet("QLabel { font-size: 20px; font-weight: bold; font-family: monospace; }")
        readout.addWidget(self.lbl_year)
        self.lbl_era = QLabel("-")
        self.lbl_era.setAlignment(Qt.AlignRight)
        self.lbl_era.setStyleSheet("QLabel { font-style: italic; }")
        readout.addWidget(self.lbl_era)
        header.addLayout(readout)

        self.btn_play = QPushButton()
        self.btn_play.setIcon(self.style().standardIcon(QStyle.SP_MediaPlay))
        self.btn_play.clicked.connect(self.play_toggled.emit)
        header.addWidget(self.btn_play)

        layout.addLayout(header)

        # --- Footer: slider with era markers ---
        self.era_strip = EraStrip()
        layout.addWidget(self.era_strip)

        hbox_slider = QHBoxLayout()
        self.slider = QSlider(Qt.Horizontal)
        self.slider.setRange(MIN_YEAR, MAX_YEAR)
        # Only user drags are seeks; programmatic updates are blocked below
        self.slider.valueChanged.connect(self.seek_requested.emit)
        hbox_slider.addWidget(self.slider)

        hbox_slider.addWidget(QLabel("速度:"))
        self.spin_interval = QSpinBox()
        self.spin_interval.setRange(10, 1000)
        self.spin_interval.setSingleStep(10)
        self.spin_interval.setValue(TICK_INTERVAL_MS)
        self.spin_interval.setSuffix(" ms/年")
        self.spin_interval.valueChanged.connect(self.interval_requested.emit)
        hbox_slider.addWidget(self.spin_interval)

        layout.addLayout(hbox_slider)

    def _on_layer_clicked(self, button: QPushButton) -> None:
        self.layer_requested.emit(button.property("layer"))

    # --- SLOTS (driven by the controller) ---

    def show_snapshot(self, snapshot: Snapshot) -> None:
        """
        Mirror a snapshot in the readout, slider, era strip and layer buttons.

        The slider is updated with its signals blocked, so showing a
        snapshot never echoes back as a seek request.

        Args:
            snapshot: Snapshot pulled from the playback controller.
        """
        self.lbl_year.setText(str(snapshot.time))
        self.lbl_era.setText(snapshot.era.label)
        self.lbl_era.setToolTip(snapshot.era.description)
        self.era_strip.set_markers(list(snapshot.markers))

        self.slider.blockSignals(True)
        self.slider.setValue(snapshot.time)
        self.slider.blockSignals(False)

        for btn in self.layer_buttons.buttons():
            btn.setChecked(btn.property("layer") == snapshot.layer.value)

    def set_playing(self, playing: bool) -> None:
        """Swap the play/pause icon."""
        icon = QStyle.SP_MediaPause if playing else QStyle.SP_MediaPlay
        self.btn_play.setIcon(self.style().standardIcon(icon))
