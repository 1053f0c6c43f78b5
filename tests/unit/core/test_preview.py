from sprite_slicer.core.frames import derive_frames
from sprite_slicer.core.preview import PreviewScheduler
from sprite_slicer.core.sequence import playback_order


def make_scheduler(count=4, **kwargs):
    frames = derive_frames([i / count for i in range(1, count)], [], 100, 10)
    scheduler = PreviewScheduler(lambda: playback_order(frames), **kwargs)
    return scheduler, frames


def test_defaults():
    scheduler, _ = make_scheduler()
    assert scheduler.fps == 8
    assert scheduler.interval_ms == 125
    assert scheduler.is_playing is True
    assert scheduler.current_index == 0


def test_full_cycle_returns_to_start():
    scheduler, _ = make_scheduler(4, fps=8)
    seen = [scheduler.tick() for _ in range(4)]
    assert seen == [1, 2, 3, 0]
    assert scheduler.current_index == 0


def test_shrinking_sequence_resets_out_of_range_index():
    scheduler, frames = make_scheduler(4)
    for _ in range(3):
        scheduler.tick()
    assert scheduler.current_index == 3

    frames[2].active = False
    frames[3].active = False
    assert scheduler.frame_count == 2
    assert scheduler.current_index == 0
    assert scheduler.current_frame().id == 0


def test_empty_sequence_tick_does_nothing():
    scheduler, frames = make_scheduler(2)
    for f in frames:
        f.active = False
    assert scheduler.tick() == 0
    assert scheduler.current_frame() is None


def test_paused_scheduler_does_not_advance():
    scheduler, _ = make_scheduler(4)
    assert scheduler.toggle_play() is False
    scheduler.tick()
    assert scheduler.current_index == 0
    scheduler.play()
    scheduler.tick()
    assert scheduler.current_index == 1


def test_fps_change_restarts_timer_and_keeps_index():
    scheduler, _ = make_scheduler(4)
    restarts = []
    scheduler.add_restart_listener(restarts.append)
    scheduler.tick()
    scheduler.tick()
    scheduler.set_fps(20)
    assert restarts == [50]
    assert scheduler.current_index == 2
    scheduler.set_fps(0)
    assert scheduler.fps == 1 and restarts[-1] == 1000


def test_sequence_change_restarts_timer():
    scheduler, frames = make_scheduler(4)
    restarts = []
    scheduler.add_restart_listener(restarts.append)
    scheduler.tick()
    frames[3].active = False
    scheduler.sequence_changed()
    assert restarts == [125]
    assert scheduler.current_index == 1


def test_step_stop_and_seek():
    scheduler, frames = make_scheduler(4)
    assert scheduler.step(-1) == 3
    assert scheduler.step(2) == 1
    frames[0].sequence_order = 10
    assert scheduler.seek_frame(0) is True
    assert scheduler.current_index == 3
    assert scheduler.seek_frame(99) is False
    scheduler.stop()
    assert scheduler.is_playing is False
    assert scheduler.current_index == 0
