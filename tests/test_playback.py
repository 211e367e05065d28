import pytest

from diffusionmap.config import DEFAULT_YEAR, MIN_YEAR, MAX_YEAR, TICK_INTERVAL_MS
from diffusionmap.controller.playback import PlaybackController
from diffusionmap.controller.scheduler import ManualTickScheduler
from diffusionmap.model.errors import InvalidTime
from diffusionmap.model.layers import Layer
from diffusionmap.model.state import PlaybackState


def test_initial_state_is_idle_at_default_year(controller, scheduler):
    assert controller.current_time == DEFAULT_YEAR == 1746
    assert controller.is_playing is False
    assert controller.state.tick_interval_ms == TICK_INTERVAL_MS == 50
    assert controller.layer == Layer.SCHOOLS
    assert not scheduler.is_active


def test_constructor_forces_idle():
    state = PlaybackState(current_time=1800, is_playing=True)
    ctrl = PlaybackController(state=state, scheduler=ManualTickScheduler())
    assert ctrl.is_playing is False
    assert ctrl.current_time == 1800


def test_play_starts_single_timer(controller, scheduler, recorder):
    controller.play()
    controller.play()
    assert controller.is_playing
    assert scheduler.is_active
    assert scheduler.start_count == 1
    assert scheduler.interval_ms == TICK_INTERVAL_MS
    assert recorder.playing == [True]


def test_tick_advances_one_year(controller, scheduler, recorder):
    controller.play()
    scheduler.fire(3)
    assert controller.current_time == DEFAULT_YEAR + 3
    assert recorder.times == [1747, 1748, 1749]
    assert recorder.invalidations == 3


def test_tick_while_idle_does_nothing(controller, recorder):
    controller.tick()
    assert controller.current_time == DEFAULT_YEAR
    assert recorder.times == []
    assert recorder.invalidations == 0


def test_pause_cancels_timer(controller, scheduler, recorder):
    controller.play()
    controller.pause()
    assert not controller.is_playing
    assert not scheduler.is_active
    assert scheduler.stop_count == 1
    assert recorder.playing == [True, False]

    # A stale callback cannot move time any more
    scheduler.fire()
    assert controller.current_time == DEFAULT_YEAR


def test_pause_while_idle_is_noop(controller, recorder):
    controller.pause()
    assert recorder.playing == []


def test_wraparound_at_max_year(controller, scheduler):
    controller.seek(MAX_YEAR)
    controller.play()
    scheduler.fire()
    assert controller.current_time == MIN_YEAR
    assert controller.is_playing


def test_seek_clamps_and_forces_idle(controller, scheduler, recorder):
    controller.play()
    controller.seek(9999)
    assert controller.is_playing is False
    assert controller.current_time == MAX_YEAR
    assert not scheduler.is_active
    assert recorder.playing == [True, False]


def test_seek_below_range_clamps_to_min(controller):
    controller.seek(-5)
    assert controller.current_time == MIN_YEAR


def test_seek_in_range(controller, recorder):
    controller.seek(1850)
    assert controller.current_time == 1850
    assert recorder.times == [1850]
    assert recorder.invalidations == 1


def test_seek_to_current_year_emits_nothing(controller, recorder):
    controller.seek(DEFAULT_YEAR)
    assert recorder.times == []
    assert recorder.invalidations == 0


def test_seek_rejects_non_numeric(controller):
    with pytest.raises(InvalidTime):
        controller.seek("soon")
    assert controller.current_time == DEFAULT_YEAR


def test_toggle_play(controller):
    controller.toggle_play()
    assert controller.is_playing
    controller.toggle_play()
    assert not controller.is_playing


def test_set_layer_notifies_once(controller, recorder):
    controller.set_layer(Layer.SYNDROMES)
    controller.set_layer("syndromes")
    assert controller.layer == Layer.SYNDROMES
    assert recorder.layers == ["syndromes"]
    assert recorder.invalidations == 1


def test_set_layer_keeps_time_and_play_state(controller):
    controller.play()
    controller.set_layer(Layer.SYNDROMES)
    assert controller.is_playing
    assert controller.current_time == DEFAULT_YEAR


def test_set_layer_rejects_unknown():
    ctrl = PlaybackController(scheduler=ManualTickScheduler())
    with pytest.raises(ValueError):
        ctrl.set_layer("weather")


def test_tick_interval_updates_running_timer(controller, scheduler):
    controller.play()
    controller.set_tick_interval(200)
    assert controller.state.tick_interval_ms == 200
    assert scheduler.interval_ms == 200


def test_tick_interval_must_be_positive(controller):
    with pytest.raises(ValueError):
        controller.set_tick_interval(0)


def test_teardown_cancels_timer_and_blocks_play(scheduler):
    ctrl = PlaybackController(scheduler=scheduler)
    ctrl.play()
    ctrl.teardown()
    assert not scheduler.is_active
    assert not ctrl.is_playing

    ctrl.play()
    assert not ctrl.is_playing
    assert not scheduler.is_active


def test_snapshot_follows_controller(controller):
    controller.seek(1850)
    snap = controller.snapshot()
    assert snap.time == 1850
    assert snap.layer == Layer.SCHOOLS
    assert len(snap.active_edges) == 3

    controller.set_layer(Layer.SYNDROMES)
    assert controller.snapshot().active_edges == ()


def test_full_loop_returns_to_start(controller, scheduler):
    controller.play()
    span = MAX_YEAR - MIN_YEAR + 1
    scheduler.fire(span)
    assert controller.current_time == DEFAULT_YEAR
