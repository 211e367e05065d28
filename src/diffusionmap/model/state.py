"""
Playback State (Data Model)
===========================
The only mutable value in the system: where the timeline cursor is and
whether it is moving.

Why is this file needed?
------------------------
1. Ownership: PlaybackController is the single writer. Views and the
   snapshot builder only read it.
2. Decoupling: the pure models take (year, layer) arguments and never
   hold on to this object.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging

from diffusionmap.config import DEFAULT_YEAR, TICK_INTERVAL_MS
from diffusionmap.model.timeline import validate_year

logger = logging.getLogger(__name__)


@dataclass
class PlaybackState:
    current_time: int = DEFAULT_YEAR
    is_playing: bool = False
    tick_interval_ms: int = TICK_INTERVAL_MS

    def __post_init__(self) -> None:
        # A state is born on the timeline with a usable timer period
        self.current_time = validate_year(self.current_time)
        if self.tick_interval_ms <= 0:
            raise ValueError(f"Tick interval must be positive, got {self.tick_interval_ms} ms.")

    def reset(self) -> None:
        """Back to the initial Idle state at the default year."""
        self.current_time = DEFAULT_YEAR
        self.is_playing = False
        self.tick_interval_ms = TICK_INTERVAL_MS
        logger.info("Playback state has been reset.")
