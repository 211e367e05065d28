"""
Playback Controller
===================
Owns the timeline cursor, the play/pause state and the active layer.

States:
    Idle    - time fixed, no timer running.
    Playing - a single periodic timer calls tick(), one year per tick.

Transitions: play() Idle -> Playing, pause() Playing -> Idle,
seek(t) clamps t and always ends Idle, tick() advances only while
Playing and wraps past MAX_YEAR to MIN_YEAR.

Every change of time or layer emits `snapshot_invalidated`; views then
pull a fresh snapshot through `snapshot()`.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

from diffusionmap.config import YEAR_STEP
from diffusionmap.controller.scheduler import TickScheduler, QtTickScheduler
from diffusionmap.model.layers import Layer, DEFAULT_LAYER
from diffusionmap.model.snapshot import Snapshot, SnapshotBuilder, default_builder
from diffusionmap.model.state import PlaybackState
from diffusionmap.model.timeline import clamp_year, wrap_year

logger = logging.getLogger(__name__)


class PlaybackController(QObject):
    time_changed = Signal(int)
    playing_changed = Signal(bool)
    layer_changed = Signal(str)
    snapshot_invalidated = Signal()

    def __init__(
        self,
        state: Optional[PlaybackState] = None,
        layer: Layer = DEFAULT_LAYER,
        scheduler: Optional[TickScheduler] = None,
        builder: Optional[SnapshotBuilder] = None,
    ) -> None:
        super().__init__()
        self.state = state or PlaybackState()
        self._layer = Layer(layer)
        self.scheduler = scheduler or QtTickScheduler()
        self.builder = builder or default_builder()
        self._torn_down = False

        # Initial state is Idle whatever the caller passed in
        self.state.current_time = clamp_year(self.state.current_time)
        self.state.is_playing = False

    # --- READ ACCESS ---

    @property
    def current_time(self) -> int:
        return self.state.current_time

    @property
    def is_playing(self) -> bool:
        return self.state.is_playing

    @property
    def layer(self) -> Layer:
        return self._layer

    def snapshot(self) -> Snapshot:
        return self.builder.get_snapshot(self.state, self._layer)

    # --- TRANSITIONS ---

    def play(self) -> None:
        if self._torn_down:
            logger.warning("play() ignored: controller has been torn down.")
            return
        if self.state.is_playing:
            return

        self.state.is_playing = True
        self.scheduler.start(self.state.tick_interval_ms, self.tick)
        logger.info(f"Playback started at {self.state.current_time}.")
        self.playing_changed.emit(True)

    def pause(self) -> None:
        if not self.state.is_playing:
            return

        self.scheduler.stop()
        self.state.is_playing = False
        logger.info(f"Playback paused at {self.state.current_time}.")
        self.playing_changed.emit(False)

    def toggle_play(self) -> None:
        if self.state.is_playing:
            self.pause()
        else:
            self.play()

    def seek(self, year: object) -> None:
        """Jump to `year` (clamped to the timeline). Scrubbing always stops autoplay."""
        target = clamp_year(year)
        self.pause()
        if target != year:
            logger.debug(f"Seek target {year!r} clamped to {target}.")
        logger.info(f"Seek to {target}.")
        self._set_time(target)

    def tick(self) -> None:
        if not self.state.is_playing:
            return
        next_year = wrap_year(self.state.current_time + YEAR_STEP)
        logger.debug(f"Tick {self.state.current_time} -> {next_year}")
        self._set_time(next_year)

    def set_layer(self, layer: Layer | str) -> None:
        layer = Layer(layer)
        if layer == self._layer:
            return
        self._layer = layer
        logger.info(f"Active layer: {layer.value}")
        self.layer_changed.emit(layer.value)
        self.snapshot_invalidated.emit()

    def set_tick_interval(self, interval_ms: int) -> None:
        if interval_ms <= 0:
            raise ValueError(f"Tick interval must be positive, got {interval_ms} ms.")
        self.state.tick_interval_ms = interval_ms
        if self.scheduler.is_active:
            self.scheduler.set_interval(interval_ms)

    def teardown(self) -> None:
        """Cancel the timer for good; the controller stays Idle afterwards."""
        self.pause()
        self.scheduler.stop()
        self._torn_down = True
        logger.info("Playback controller torn down.")

    # --- HELPERS ---

    def _set_time(self, year: int) -> None:
        if year == self.state.current_time:
            return
        self.state.current_time = year
        self.time_changed.emit(year)
        self.snapshot_invalidated.emit()
