import pytest
from sprite_slicer.core import ImageLoadError, SheetEditor, SlicerConfig, SourceImage


def test_not_ready_image_is_a_noop():
    editor = SheetEditor(SlicerConfig(rows=2, cols=2))
    assert editor.source.ready is False
    assert editor.rebuild_frames() is False
    editor.resize(3, 3)
    assert editor.frames == []
    assert editor.export_plan() == []
    assert editor.rows == 3 and editor.cols == 3

    # Pointer input before the image arrives changes nothing
    editor.selection.pointer_move(10, 10)
    editor.selection.pointer_down(10, 10)
    editor.selection.pointer_up(10, 10)
    assert editor.selected_ids == set()


def test_set_image_derives_frames(sheet_image):
    editor = SheetEditor(SlicerConfig(rows=2, cols=3))
    editor.set_image(SourceImage(sheet_image))
    assert len(editor.frames) == 6
    assert editor.frames[5].box == (200, 150, 300, 300)


def test_resize_clamps_and_rebuilds(editor):
    editor.resize(0, 50)
    assert (editor.rows, editor.cols) == (1, 20)
    assert len(editor.frames) == 20
    assert (editor.config.rows, editor.config.cols) == (1, 20)


def test_rebuild_clears_selection_but_keeps_cell_edits(editor):
    editor.selection.click(150, 150)
    editor.selection.nudge(2, 0)
    editor.selection.set_active(False)
    assert editor.selected_ids == {4}

    editor.resize(3, 4)
    assert editor.selected_ids == set()
    cell = next(f for f in editor.frames if (f.row, f.col) == (1, 1))
    assert cell.offset_x == 2 and cell.active is False
    new_cell = next(f for f in editor.frames if (f.row, f.col) == (0, 3))
    assert new_cell.active is True and new_cell.sequence_order == new_cell.id


def test_listeners_are_notified(editor):
    calls = []
    editor.add_listener(lambda: calls.append(1))
    editor.selection.click(10, 10)
    editor.selection.nudge(1, 0)
    assert len(calls) >= 2


def test_export_plan_follows_playback_order(editor):
    editor.selection.click(10, 10)
    editor.selection.nudge(0, 3)
    editor.sequence.move_in_sequence(1)
    editor.selection.click(250, 250)
    editor.selection.set_active(False)

    plan = editor.export_plan()
    assert [p.frame_id for p in plan] == [1, 0, 2, 3, 4, 5, 6, 7]
    assert plan[1].box == (0, 0, 100, 100)
    assert (plan[1].offset_x, plan[1].offset_y) == (0, 3)


def test_click_jumps_preview_and_pauses(editor):
    assert editor.preview.is_playing
    editor.selection.click(250, 150)  # frame 5
    assert editor.preview.current_index == 5
    assert editor.preview.is_playing is False


def test_set_fps_updates_config(editor):
    editor.set_fps(12)
    assert editor.preview.fps == 12
    assert editor.config.fps == 12
    assert editor.tick_preview() == 1


def test_failed_load_keeps_current_source(editor, tmp_path):
    bad = tmp_path / "broken.png"
    bad.write_bytes(b"not an image")
    source = editor.source
    with pytest.raises(ImageLoadError):
        editor.load_image(str(bad))
    assert editor.source is source
    assert len(editor.frames) == 9


def test_load_image_from_disk(make_temp_image):
    editor = SheetEditor(SlicerConfig(rows=2, cols=5))
    editor.load_image(make_temp_image(size=(50, 20)))
    assert editor.source.ready
    assert editor.source.size == (50, 20)
    assert len(editor.frames) == 10


def test_divider_drag_keeps_preview_timer_running(editor):
    restarts = []
    editor.preview.add_restart_listener(restarts.append)
    sel = editor.selection
    sel.pointer_down(100, 50)
    for x in range(110, 200, 10):
        sel.pointer_move(x, 50)
    sel.pointer_up(190, 50)
    assert editor.frames[0].box == (0, 0, 190, 100)
    assert restarts == []

    editor.resize(2, 2)
    assert len(restarts) == 1
