import pytest
from PIL import Image
from sprite_slicer.core import GifBuilder, SourceImage
from sprite_slicer.core.frames import FramePlacement


def test_build_from_plan_uses_active_order_and_fps(tmp_gif_path, editor):
    editor.selection.click(250, 250)
    editor.selection.set_active(False)

    gb = GifBuilder()
    gb.build_from_plan(editor.source, editor.export_plan(), fps=10, output_path=str(tmp_gif_path))
    info = gb.get_gif_info(str(tmp_gif_path))
    assert info['frame_count'] == 8
    assert info['size'] == (100, 100)
    assert info['total_duration_ms'] == 800


def test_build_with_solid_background(tmp_gif_path, editor):
    gb = GifBuilder()
    gb.set_background_color(255, 255, 255, 255)
    gb.set_color_count(64)
    gb.build_from_plan(editor.source, editor.export_plan(), fps=8, output_path=str(tmp_gif_path))
    info = gb.get_gif_info(str(tmp_gif_path))
    assert info['frame_count'] == 9
    # 125 ms is not storable in a GIF, every frame is written as 120 ms
    assert info['total_duration_ms'] == 9 * 120


def test_frame_duration_uses_gif_resolution():
    assert GifBuilder.frame_duration(8) == 120
    assert GifBuilder.frame_duration(10) == 100
    assert GifBuilder.frame_duration(12) == 80
    assert GifBuilder.frame_duration(30) == 30
    assert GifBuilder.frame_duration(60) == 20
    assert GifBuilder.frame_duration(0) == 1000


def test_build_requires_frames_and_ready_source(tmp_gif_path, editor):
    gb = GifBuilder()
    with pytest.raises(ValueError):
        gb.build_from_plan(editor.source, [], fps=8, output_path=str(tmp_gif_path))
    with pytest.raises(ValueError):
        gb.build_from_plan(SourceImage.pending(), editor.export_plan(), fps=8, output_path=str(tmp_gif_path))


def test_render_frame_applies_offset():
    sheet = Image.new('RGBA', (4, 4), (0, 0, 0, 0))
    sheet.putpixel((1, 1), (255, 0, 0, 255))
    source = SourceImage(sheet)

    gb = GifBuilder()
    plain = gb.render_frame(source, FramePlacement(0, (0, 0, 4, 4), 0, 0))
    assert plain.getpixel((1, 1)) == (255, 0, 0, 255)

    # A positive offset moves the sprite up and left
    shifted = gb.render_frame(source, FramePlacement(0, (0, 0, 4, 4), 1, 1))
    assert shifted.getpixel((0, 0)) == (255, 0, 0, 255)
    assert shifted.getpixel((1, 1))[3] == 0

    assert gb.render_frame(SourceImage.pending(), FramePlacement(0, (0, 0, 4, 4), 0, 0)) is None


def test_export_slices_writes_pngs_in_order(tmp_path, editor):
    editor.selection.click(10, 10)
    editor.sequence.move_in_sequence(1)

    paths = GifBuilder().export_slices(editor.source, editor.export_plan(), str(tmp_path / "out"), prefix="walk")
    assert [p.name for p in paths][:2] == ["walk_001.png", "walk_002.png"]
    assert len(paths) == 9
    with Image.open(paths[0]) as first:
        # frame 1 (row 0, col 1) plays first now
        assert first.size == (100, 100)
        assert first.getpixel((50, 50)) == (50, 150, 128, 255)
