from PyQt6.QtGui import QPixmap, QImage
from PIL import Image


def pil_to_pixmap(pil_image: Image.Image) -> QPixmap:
    """Convert PIL image to QPixmap with transparency support"""
    if pil_image.mode != 'RGBA':
        pil_image = pil_image.convert('RGBA')

    data = pil_image.tobytes('raw', 'RGBA')
    qimage = QImage(data, pil_image.width, pil_image.height, QImage.Format.Format_RGBA8888)

    # copy() detaches the QImage from the bytes buffer before it is freed
    return QPixmap.fromImage(qimage.copy())
