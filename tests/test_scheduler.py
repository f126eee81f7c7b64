"""
Tests for the playback scheduler.
"""

import pytest
from numpy.testing import assert_allclose

from qlab_solver.core.parameters import PlaybackParameters
from qlab_solver.dynamics.evolution import evolve_frame
from qlab_solver.dynamics.scheduler import PlaybackScheduler


class FakeClock:
    """Manually advanced wall clock."""

    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def recorded():
    return []


@pytest.fixture
def scheduler(clock, recorded):
    def callback(t):
        recorded.append(t)
        return t

    return PlaybackScheduler(callback, time_step=0.05, clock=clock)


@pytest.mark.unit
class TestPlaybackScheduler:
    """Test start/stop/tick semantics."""

    def test_starts_stopped(self, scheduler, recorded):
        assert not scheduler.is_running
        assert scheduler.tick() is None
        assert recorded == []
        assert scheduler.current_time == 0.0

    def test_tick_advances_time(self, scheduler, recorded):
        scheduler.start()
        scheduler.tick()
        scheduler.tick()
        scheduler.tick()

        assert scheduler.ticks == 3
        assert_allclose(recorded, [0.05, 0.10, 0.15])
        assert_allclose(scheduler.current_time, 0.15)

    def test_speed_multiplier(self, clock, recorded):
        scheduler = PlaybackScheduler(recorded.append, time_step=0.05, speed=2.0, clock=clock)
        scheduler.run(2)
        assert_allclose(recorded, [0.1, 0.2])

    def test_stop_makes_ticks_noops(self, scheduler, recorded):
        scheduler.start()
        scheduler.tick()
        scheduler.stop()

        assert scheduler.tick() is None
        assert scheduler.tick() is None
        assert len(recorded) == 1
        assert_allclose(scheduler.current_time, 0.05)

    def test_resume_continues_from_current_time(self, scheduler, recorded):
        scheduler.run(2)
        scheduler.run(1)
        assert_allclose(recorded, [0.05, 0.10, 0.15])

    def test_start_and_stop_are_idempotent(self, scheduler, clock):
        scheduler.start()
        clock.advance(1.0)
        scheduler.start()
        clock.advance(1.0)
        scheduler.stop()
        scheduler.stop()

        assert not scheduler.is_running
        assert_allclose(scheduler.elapsed_wall_time(), 2.0)

    def test_elapsed_wall_time(self, scheduler, clock):
        scheduler.start()
        clock.advance(0.5)
        assert_allclose(scheduler.elapsed_wall_time(), 0.5)
        scheduler.stop()

        clock.advance(10.0)
        assert_allclose(scheduler.elapsed_wall_time(), 0.5)

    def test_reset(self, scheduler, clock):
        scheduler.run(4)
        scheduler.start()
        scheduler.reset(start_time=1.0)

        assert not scheduler.is_running
        assert scheduler.ticks == 0
        assert scheduler.current_time == 1.0
        assert scheduler.elapsed_wall_time() == 0.0

    def test_seek(self, scheduler, recorded):
        assert scheduler.seek(3.0) == 3.0
        assert recorded == [3.0]
        assert not scheduler.is_running

    def test_run_stops_on_callback_error(self, clock):
        def boom(t):
            raise RuntimeError("frame failed")

        scheduler = PlaybackScheduler(boom, clock=clock)
        with pytest.raises(RuntimeError):
            scheduler.run(3)
        assert not scheduler.is_running

    def test_invalid_time_step(self):
        with pytest.raises(ValueError):
            PlaybackScheduler(lambda t: t, time_step=0.0)

    def test_from_parameters(self, clock):
        params = PlaybackParameters(time_step=0.2, speed=0.5)
        scheduler = PlaybackScheduler.from_parameters(lambda t: t, params, clock=clock)

        assert scheduler.time_step == 0.2
        assert scheduler.speed == 0.5
        assert_allclose(scheduler.run(1), [0.1])

    def test_drives_evolution(self, harmonic_spectrum, clock):
        """Test the scheduler producing evolution frames."""
        scheduler = PlaybackScheduler(
            lambda t: evolve_frame(harmonic_spectrum, t, preset="superposition"),
            clock=clock,
        )
        frames = scheduler.run(3)

        assert [round(f.t, 10) for f in frames] == [0.05, 0.1, 0.15]
        for frame in frames:
            assert_allclose(frame.norm, 1.0, atol=1e-6)
