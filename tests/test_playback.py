import pytest

from sheet2anim.core import Animation, AnimationFrame, Frame, LoopStrategy
from sheet2anim.core.playback import PlaybackEngine, PlaybackState, clamp_duration, next_step


def make_animation(count, strategy=LoopStrategy.LOOP, duration=100, name="Walk"):
    frames = tuple(AnimationFrame(frame_index=i, duration=duration) for i in range(count))
    return Animation(name=name, frames=frames, loop_strategy=strategy)


def run_steps(engine, transitions, duration=100):
    """Tick one duration at a time and record the step after each."""

    shown = [engine.current_step]
    for _ in range(transitions):
        engine.tick(duration)
        shown.append(engine.current_step)
    return shown


def test_loop_wraps_to_start():
    engine = PlaybackEngine(make_animation(4))
    engine.play()
    assert run_steps(engine, 5) == [0, 1, 2, 3, 0, 1]
    assert engine.is_playing


def test_freeze_holds_last_step_and_keeps_playing():
    engine = PlaybackEngine(make_animation(3, LoopStrategy.FREEZE))
    engine.play()
    assert run_steps(engine, 4) == [0, 1, 2, 2, 2]
    assert engine.is_playing


def test_end_stops_on_last_step():
    engine = PlaybackEngine(make_animation(3, LoopStrategy.END))
    engine.play()
    assert run_steps(engine, 3) == [0, 1, 2, 2]
    assert not engine.is_playing
    assert engine.tick(1000) == ()
    assert engine.current_step == 2


def test_ping_pong_bounces():
    engine = PlaybackEngine(make_animation(3, LoopStrategy.PING_PONG))
    engine.play()
    assert run_steps(engine, 5) == [0, 1, 2, 1, 0, 1]


def test_ping_pong_with_two_frames_alternates():
    engine = PlaybackEngine(make_animation(2, LoopStrategy.PING_PONG))
    engine.play()
    assert run_steps(engine, 4) == [0, 1, 0, 1, 0]


def test_ping_pong_with_one_frame_stays_put():
    engine = PlaybackEngine(make_animation(1, LoopStrategy.PING_PONG))
    engine.play()
    assert run_steps(engine, 3) == [0, 0, 0, 0]
    assert engine.direction == 1


def test_single_frame_ping_pong_large_tick():
    engine = PlaybackEngine(make_animation(1, LoopStrategy.PING_PONG))
    engine.play()
    visited = engine.tick(1_000_050)
    assert len(visited) == 10_000
    assert set(visited) == {0}
    assert engine.direction == 1
    assert engine.state.elapsed == pytest.approx(50)


@pytest.mark.parametrize("strategy", list(LoopStrategy))
def test_step_index_stays_in_range(strategy):
    engine = PlaybackEngine(make_animation(3, strategy, duration=7))
    engine.play()
    for _ in range(50):
        engine.tick(5)
        assert 0 <= engine.current_step < 3


def test_single_large_tick_commits_every_step():
    engine = PlaybackEngine(make_animation(4))
    engine.play()
    assert engine.tick(450) == (1, 2, 3, 0)
    assert engine.state.elapsed == pytest.approx(50)


def test_tick_granularity_does_not_change_sequence():
    animation = make_animation(3, LoopStrategy.PING_PONG, duration=40)
    coarse = PlaybackEngine(animation)
    fine = PlaybackEngine(animation)
    coarse.play()
    fine.play()

    coarse_steps = list(coarse.tick(400))
    fine_steps = []
    for _ in range(100):
        fine_steps.extend(fine.tick(4))
    assert coarse_steps == fine_steps
    assert coarse.current_step == fine.current_step


def test_fractional_ticks_add_up_exactly():
    animation = make_animation(4)
    fine = PlaybackEngine(animation)
    coarse = PlaybackEngine(animation)
    fine.play()
    coarse.play()

    fine_steps = []
    for _ in range(3000):
        fine_steps.extend(fine.tick(0.1))
    assert fine_steps == list(coarse.tick(300)) == [1, 2, 3]
    assert fine.state == coarse.state
    assert fine.state.elapsed_us == 0


def test_variable_durations_are_respected():
    frames = (AnimationFrame(0, 50), AnimationFrame(1, 200))
    engine = PlaybackEngine(Animation("Idle", frames))
    engine.play()
    assert engine.tick(49) == ()
    assert engine.tick(1) == (1,)
    assert engine.tick(199) == ()
    assert engine.tick(1) == (0,)


def test_zero_duration_is_clamped():
    assert clamp_duration(0) == 1
    assert clamp_duration(-20) == 1
    engine = PlaybackEngine(Animation("Fast", (AnimationFrame(0, 0), AnimationFrame(1, 0))))
    engine.play()
    assert engine.tick(3) == (1, 0, 1)


def test_single_looping_frame_reports_each_repeat():
    engine = PlaybackEngine(make_animation(1))
    engine.play()
    assert engine.tick(350) == (0, 0, 0)
    assert engine.state.elapsed == pytest.approx(50)


def test_empty_animation_is_not_playable():
    engine = PlaybackEngine(Animation("Empty"))
    engine.play()
    assert not engine.is_playing
    assert engine.tick(1000) == ()
    assert engine.current_frame_index is None
    assert engine.resolve_frame([Frame(0, 0, 0, 8, 8)]) is None


def test_no_selection_does_nothing():
    engine = PlaybackEngine()
    engine.toggle()
    assert not engine.is_playing
    assert engine.current_animation_frame is None


def test_paused_engine_ignores_ticks():
    engine = PlaybackEngine(make_animation(3))
    engine.play()
    engine.tick(60)
    engine.pause()
    assert engine.tick(1000) == ()
    engine.play()
    assert engine.tick(40) == (1,)


def test_select_rewinds_and_keeps_playing():
    engine = PlaybackEngine(make_animation(4))
    engine.play()
    engine.tick(250)
    engine.select(make_animation(2, name="Run"))
    assert engine.state == PlaybackState(playing=True)


def test_selecting_an_empty_animation_stops_playback():
    engine = PlaybackEngine(make_animation(4))
    engine.play()
    engine.select(Animation("Empty"))
    assert not engine.is_playing
    assert engine.current_step == 0


def test_sync_keeps_position_on_duration_edit():
    animation = make_animation(4)
    engine = PlaybackEngine(animation)
    engine.play()
    engine.tick(250)
    edited = Animation(animation.name, tuple(AnimationFrame(f.frame_index, 300) for f in animation.frames))
    engine.sync(edited)
    assert engine.current_step == 2
    assert engine.animation is edited


def test_sync_rewinds_when_frame_count_changes():
    engine = PlaybackEngine(make_animation(4))
    engine.play()
    engine.tick(250)
    engine.sync(make_animation(3))
    assert engine.current_step == 0
    assert engine.is_playing


def test_restart_rewinds_and_pauses():
    engine = PlaybackEngine(make_animation(4, LoopStrategy.PING_PONG))
    engine.play()
    engine.tick(450)
    engine.restart()
    assert engine.state == PlaybackState()


def test_state_listeners_see_each_flip():
    seen = []
    engine = PlaybackEngine(make_animation(2, LoopStrategy.END))
    engine.add_state_listener(seen.append)
    engine.play()
    engine.play()
    engine.tick(500)
    assert seen == [True, False]


def test_resolve_frame_skips_dangling_reference():
    frames = [Frame(0, 0, 0, 8, 8)]
    animation = Animation("Walk", (AnimationFrame(0, 100), AnimationFrame(5, 100)))
    engine = PlaybackEngine(animation)
    engine.play()
    assert engine.resolve_frame(frames) == frames[0]
    engine.tick(100)
    assert engine.current_frame_index == 5
    assert engine.resolve_frame(frames) is None
    # playback carries on past the missing frame
    assert engine.tick(100) == (0,)


def test_next_step_transitions():
    assert next_step(2, 1, 3, LoopStrategy.LOOP) == (0, 1, True)
    assert next_step(2, 1, 3, LoopStrategy.FREEZE) == (2, 1, True)
    assert next_step(2, 1, 3, LoopStrategy.END) == (2, 1, False)
    assert next_step(2, 1, 3, LoopStrategy.PING_PONG) == (1, -1, True)
    assert next_step(0, -1, 3, LoopStrategy.PING_PONG) == (1, 1, True)
