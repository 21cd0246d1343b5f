"""
Conversions between Pillow images and Qt pixmaps.
"""

import numpy as np
from PIL import Image
from PyQt6.QtGui import QImage, QPixmap


def pil_to_pixmap(image: Image.Image) -> QPixmap:
    """Convert a Pillow image to a QPixmap."""
    if image.mode != 'RGB':
        image = image.convert('RGB')
    data = np.ascontiguousarray(np.asarray(image, dtype=np.uint8))
    height, width = data.shape[:2]
    bytes_per_line = 3 * width
    qimage = QImage(data.tobytes(), width, height, bytes_per_line,
                    QImage.Format.Format_RGB888)
    # QImage does not own the buffer; copy before it goes out of scope
    return QPixmap.fromImage(qimage.copy())
