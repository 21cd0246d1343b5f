"""
Photo Strip Dialog

Result view shown when a capture session completes: the composed
strip, background color choices, and Download / Close buttons.
"""

import logging
from pathlib import Path
from typing import Optional

from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QFileDialog, QMessageBox, QScrollArea, QButtonGroup
)
from PyQt6.QtCore import Qt

from ..image_utils import pil_to_pixmap
from ...core.controller import BoothController
from ...core.exceptions import CompositionError, ExportError
from ...core.palette import Background
from ...io.export import ExportSink, write_file

logger = logging.getLogger(__name__)


class DialogExportSink(ExportSink):
    """Ask the user where to save the strip, then write it."""

    def __init__(self, parent=None, directory: Optional[str] = None):
        self.parent = parent
        self.directory = directory or str(Path.home())

    def save(self, data: bytes, filename: str) -> Optional[str]:
        path, _ = QFileDialog.getSaveFileName(
            self.parent,
            "Save Photo Strip",
            str(Path(self.directory) / filename),
            "PNG Images (*.png)"
        )
        if not path:
            return None
        saved = write_file(data, path)
        self.directory = str(Path(saved).parent)
        return saved


class StripDialog(QDialog):
    """Modal result view for a completed session."""

    def __init__(self, controller: BoothController,
                 export_directory: Optional[str] = None, parent=None):
        super().__init__(parent)
        self.controller = controller
        self.sink = DialogExportSink(self, export_directory)
        self.setWindowTitle("Your Photo Strip")
        self.setModal(True)
        self.setAttribute(Qt.WidgetAttribute.WA_DeleteOnClose)
        self._init_ui()
        self.refresh()

    def _init_ui(self):
        layout = QVBoxLayout()

        self.strip_label = QLabel()
        self.strip_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        scroll = QScrollArea()
        scroll.setWidget(self.strip_label)
        scroll.setWidgetResizable(True)
        scroll.setMinimumSize(300, 500)
        layout.addWidget(scroll, 1)

        # Background colors
        colors_layout = QHBoxLayout()
        colors_layout.addStretch()
        self.color_group = QButtonGroup(self)
        self.color_group.setExclusive(True)
        self._color_buttons = {}
        for background in Background:
            btn = QPushButton()
            btn.setCheckable(True)
            btn.setFixedSize(28, 28)
            btn.setToolTip(background.value.capitalize())
            btn.setStyleSheet(
                f"QPushButton {{ background-color: {background.hex}; "
                f"border: 2px solid #888; border-radius: 14px; }}"
                f"QPushButton:checked {{ border: 3px solid #dd8502; }}"
            )
            btn.clicked.connect(
                lambda checked, b=background: self.controller.select_background(b)
            )
            self.color_group.addButton(btn)
            self._color_buttons[background] = btn
            colors_layout.addWidget(btn)
        colors_layout.addStretch()
        layout.addLayout(colors_layout)

        # Buttons
        buttons_layout = QHBoxLayout()
        download_btn = QPushButton("Download")
        download_btn.clicked.connect(self._on_download)
        buttons_layout.addWidget(download_btn)

        close_btn = QPushButton("Close")
        close_btn.clicked.connect(self.reject)
        buttons_layout.addWidget(close_btn)
        layout.addLayout(buttons_layout)

        self.setLayout(layout)

    @property
    def export_directory(self) -> str:
        return self.sink.directory

    def refresh(self):
        """Re-render the strip with the current filter and background."""
        state = self.controller.state
        button = self._color_buttons.get(state.background)
        if button is not None:
            button.setChecked(True)
        try:
            image = self.controller.render_strip()
        except CompositionError as e:
            logger.error(f"Could not render strip: {e}")
            self.strip_label.setText(e.message)
            return
        self.strip_label.setPixmap(pil_to_pixmap(image))

    def _on_download(self):
        try:
            path = self.controller.export_strip(self.sink)
        except (CompositionError, ExportError) as e:
            QMessageBox.warning(self, "Download Failed", e.message)
            return
        if path:
            QMessageBox.information(self, "Saved", f"Photo strip saved to:\n{path}")

    def reject(self):
        """Closing the dialog discards the session."""
        self.controller.dismiss_result()
        super().reject()
