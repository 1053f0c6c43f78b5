import pytest
from PIL import Image

from sprite_slicer.core import SheetEditor, SourceImage


@pytest.fixture()
def tmp_gif_path(tmp_path):
    return tmp_path / "out.gif"


@pytest.fixture()
def rgb_image_small() -> Image.Image:
    return Image.new('RGB', (8, 8), (10, 20, 30))


@pytest.fixture()
def sheet_image() -> Image.Image:
    # 300x300 sheet, each 100x100 cell of a 3x3 grid painted a different color
    img = Image.new('RGBA', (300, 300), (0, 0, 0, 0))
    for row in range(3):
        for col in range(3):
            color = (row * 100 + 50, col * 100 + 50, 128, 255)
            img.paste(color, (col * 100, row * 100, col * 100 + 100, row * 100 + 100))
    return img


@pytest.fixture()
def make_editor(sheet_image):
    def _make(rows=3, cols=3):
        editor = SheetEditor()
        editor.set_image(SourceImage(sheet_image, "sheet"))
        editor.resize(rows, cols)
        return editor
    return _make


@pytest.fixture()
def editor(make_editor) -> SheetEditor:
    return make_editor()


@pytest.fixture()
def make_temp_image(tmp_path):
    def _make(size=(10, 10), color=(100, 150, 200, 255), mode='RGBA'):
        img = Image.new(mode, size, color)
        p = tmp_path / "img.png"
        img.save(p)
        return str(p)
    return _make
