"""Tests for the per-pad playback state machine."""

import pytest

from padboard.core import PadChannel
from padboard.exceptions import PlaybackError
from padboard.models import PadState, RetriggerPolicy
from padboard.protocols import (
    DeactivationReason,
    PadActivated,
    PadDeactivated,
    PadTriggerFailed,
)


@pytest.fixture
def clip(make_clip):
    return make_clip(3, 500.0)


@pytest.fixture
def channel(audio_output, scheduler, recorder):
    channel = PadChannel(3, audio_output, scheduler)
    channel.register_observer(recorder)
    return channel


@pytest.mark.unit
class TestTrigger:
    """Test IDLE -> PLAYING."""

    def test_new_channel_is_idle(self, channel):
        assert channel.state == PadState.IDLE
        assert channel.active_playback is None
        assert channel.pending_reset is None
        assert channel.current_clip is None

    def test_trigger_is_queued_not_applied(self, channel, clip, scheduler, audio_output):
        channel.trigger(clip)

        assert scheduler.pending_callbacks == 1
        assert channel.state == PadState.IDLE
        assert audio_output.started == []

    def test_trigger_starts_playing(self, channel, clip, scheduler, audio_output, recorder):
        channel.trigger(clip)
        scheduler.run_pending()

        assert channel.state == PadState.PLAYING
        assert channel.is_playing
        assert channel.current_clip is clip
        assert channel.active_playback is audio_output.started[0]
        assert audio_output.started[0].resource is clip.resource
        assert channel.pending_reset is not None
        assert len(scheduler.live_timers) == 1

        assert len(recorder.events) == 1
        event = recorder.events[0]
        assert isinstance(event, PadActivated)
        assert event.pad_id == 3
        assert event.clip is clip

    def test_reset_timer_uses_clip_duration(self, channel, clip, scheduler):
        channel.trigger(clip)
        scheduler.run_pending()

        assert scheduler.live_timers[0].when == pytest.approx(0.5)


@pytest.mark.unit
class TestAutoReset:
    """Test PLAYING -> IDLE when the clip finishes."""

    def test_still_playing_before_duration(self, channel, clip, scheduler):
        channel.trigger(clip)
        scheduler.advance(0.49)

        assert channel.is_playing

    def test_returns_to_idle_after_duration(self, channel, clip, scheduler, audio_output, recorder):
        channel.trigger(clip)
        scheduler.advance(0.5)

        assert channel.state == PadState.IDLE
        assert channel.active_playback is None
        assert channel.pending_reset is None
        assert channel.current_clip is None
        assert audio_output.started[0].stopped

        deactivations = recorder.of_type(PadDeactivated)
        assert len(deactivations) == 1
        assert deactivations[0].reason == DeactivationReason.FINISHED

    def test_exactly_one_deactivation_per_playback(self, channel, clip, scheduler, recorder):
        channel.trigger(clip)
        scheduler.advance(5.0)

        assert [type(e) for e in recorder.events] == [PadActivated, PadDeactivated]

    def test_can_play_again_after_finishing(self, channel, clip, scheduler, recorder):
        channel.trigger(clip)
        scheduler.advance(1.0)
        channel.trigger(clip)
        scheduler.run_pending()

        assert channel.is_playing
        assert [type(e) for e in recorder.events] == [PadActivated, PadDeactivated, PadActivated]


@pytest.mark.unit
class TestRetrigger:
    """Test PLAYING -> PLAYING (restart)."""

    def test_retrigger_restarts_playback(self, channel, clip, scheduler, audio_output):
        channel.trigger(clip)
        scheduler.run_pending()
        first = channel.active_playback

        channel.trigger(clip)
        scheduler.run_pending()

        assert first.stopped
        assert channel.active_playback is audio_output.started[1]
        assert audio_output.live == [channel.active_playback]

    def test_retrigger_cancels_previous_timer(self, channel, clip, scheduler):
        channel.trigger(clip)
        scheduler.run_pending()
        first_timer = channel.pending_reset

        channel.trigger(clip)
        scheduler.run_pending()

        assert first_timer.cancelled
        assert channel.pending_reset is not first_timer
        assert len(scheduler.live_timers) == 1

    def test_retrigger_emits_activation_without_deactivation(self, channel, clip, scheduler, recorder):
        channel.trigger(clip)
        scheduler.run_pending()
        channel.trigger(clip)
        scheduler.run_pending()

        assert [type(e) for e in recorder.events] == [PadActivated, PadActivated]

    def test_restart_extends_playing_time(self, channel, clip, scheduler, recorder):
        channel.trigger(clip)
        scheduler.advance(0.3)
        channel.trigger(clip)

        # First playback would have ended at 0.5s, the restart runs until 0.8s
        scheduler.advance(0.3)
        assert channel.is_playing
        assert recorder.of_type(PadDeactivated) == []

        scheduler.advance(0.2)
        assert channel.state == PadState.IDLE
        assert len(recorder.of_type(PadDeactivated)) == 1

    def test_rapid_retriggers_keep_one_timer(self, channel, clip, scheduler, audio_output):
        for _ in range(10):
            channel.trigger(clip)
        scheduler.run_pending()

        assert len(scheduler.live_timers) == 1
        assert len(audio_output.live) == 1
        assert channel.is_playing

    def test_stale_timer_is_ignored(self, channel, clip, scheduler, recorder):
        channel.trigger(clip)
        scheduler.run_pending()
        channel.trigger(clip)
        scheduler.run_pending()

        # Timer of the first playback fires despite having been cancelled
        channel._on_reset_timer(1)

        assert channel.is_playing
        assert recorder.of_type(PadDeactivated) == []

    def test_ignore_policy_keeps_current_playback(self, audio_output, scheduler, recorder, clip):
        channel = PadChannel(3, audio_output, scheduler, RetriggerPolicy.IGNORE)
        channel.register_observer(recorder)

        channel.trigger(clip)
        scheduler.run_pending()
        first = channel.active_playback
        channel.trigger(clip)
        scheduler.run_pending()

        assert channel.active_playback is first
        assert not first.stopped
        assert len(recorder.events) == 1


@pytest.mark.unit
class TestStop:
    """Test explicit stop."""

    def test_stop_while_idle_does_nothing(self, channel, scheduler, audio_output, recorder):
        channel.stop()
        scheduler.run_pending()

        assert channel.state == PadState.IDLE
        assert audio_output.stopped == []
        assert recorder.events == []

    def test_stop_while_playing(self, channel, clip, scheduler, audio_output, recorder):
        channel.trigger(clip)
        scheduler.run_pending()
        timer = channel.pending_reset

        channel.stop()
        scheduler.run_pending()

        assert channel.state == PadState.IDLE
        assert timer.cancelled
        assert audio_output.started[0].stopped

        event = recorder.events[-1]
        assert isinstance(event, PadDeactivated)
        assert event.reason == DeactivationReason.STOPPED

    def test_no_finished_event_after_stop(self, channel, clip, scheduler, recorder):
        channel.trigger(clip)
        scheduler.run_pending()
        channel.stop()
        scheduler.advance(5.0)

        assert len(recorder.of_type(PadDeactivated)) == 1

    def test_stop_playback_error_is_logged(self, channel, clip, scheduler, audio_output, caplog):
        channel.trigger(clip)
        scheduler.run_pending()

        def broken_stop(handle):
            raise RuntimeError("device gone")

        audio_output.stop_playback = broken_stop
        channel.stop()
        scheduler.run_pending()

        assert channel.state == PadState.IDLE
        assert "error stopping playback" in caplog.text


@pytest.mark.unit
class TestTriggerFailure:
    """Test failure to start playback."""

    def test_failure_leaves_channel_idle(self, channel, clip, scheduler, audio_output, recorder, playback_error):
        audio_output.fail_with = playback_error

        channel.trigger(clip)
        scheduler.run_pending()

        assert channel.state == PadState.IDLE
        assert channel.active_playback is None
        assert channel.pending_reset is None
        assert scheduler.live_timers == []

        assert recorder.of_type(PadActivated) == []
        failures = recorder.of_type(PadTriggerFailed)
        assert len(failures) == 1
        assert failures[0].pad_id == 3
        assert failures[0].cause is playback_error

    def test_unexpected_error_is_wrapped(self, channel, clip, scheduler, audio_output, recorder):
        original = OSError("buffer underrun")
        audio_output.fail_with = original

        channel.trigger(clip)
        scheduler.run_pending()

        failure = recorder.events[0]
        assert isinstance(failure, PadTriggerFailed)
        assert isinstance(failure.cause, PlaybackError)
        assert failure.cause.cause is original
        assert "pad 3" in failure.cause.user_message

    def test_channel_usable_after_failure(self, channel, clip, scheduler, audio_output, playback_error):
        audio_output.fail_with = playback_error
        channel.trigger(clip)
        scheduler.run_pending()

        audio_output.fail_with = None
        channel.trigger(clip)
        scheduler.run_pending()

        assert channel.is_playing

    def test_failed_retrigger_ends_idle(self, channel, clip, scheduler, audio_output, recorder, playback_error):
        channel.trigger(clip)
        scheduler.run_pending()
        first = channel.active_playback
        first_timer = channel.pending_reset

        audio_output.fail_with = playback_error
        channel.trigger(clip)
        scheduler.run_pending()

        assert channel.state == PadState.IDLE
        assert first.stopped
        assert first_timer.cancelled
        assert [type(e) for e in recorder.events] == [PadActivated, PadDeactivated, PadTriggerFailed]
        assert recorder.events[1].reason == DeactivationReason.STOPPED


@pytest.mark.unit
class TestObservers:
    """Test channel notifications."""

    def test_raising_observer_does_not_break_channel(self, channel, clip, scheduler, recorder):
        class BrokenObserver:
            def on_pad_event(self, event):
                raise ValueError("observer bug")

        channel.register_observer(BrokenObserver())
        channel.trigger(clip)
        scheduler.advance(1.0)

        assert channel.state == PadState.IDLE
        assert len(recorder.events) == 2

    def test_unregistered_observer_gets_nothing(self, channel, clip, scheduler, recorder):
        channel.unregister_observer(recorder)
        channel.trigger(clip)
        scheduler.run_pending()

        assert recorder.events == []

    def test_observer_may_query_channel_during_notification(self, channel, clip, scheduler):
        seen = []

        class QueryingObserver:
            def on_pad_event(self, event):
                seen.append(channel.state)

        channel.register_observer(QueryingObserver())
        channel.trigger(clip)
        scheduler.advance(1.0)

        assert seen == [PadState.PLAYING, PadState.IDLE]
