"""
Main Application Window for PuffyBooth
"""

import logging
from typing import Optional

from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel,
    QPushButton, QButtonGroup, QStatusBar
)
from PyQt6.QtCore import Qt, QSettings

from .qt_scheduler import QtScheduler
from .widgets.preview_widget import CameraPreviewWidget
from .dialogs.strip_dialog import StripDialog
from ..camera.base import Camera
from ..camera.opencv_camera import OpenCVCamera
from ..core.controller import BoothController, BoothState
from ..core.exceptions import CaptureError
from ..core.filters import FilterPreset
from ..core.palette import Background
from ..core.session import Phase
from ..core.settings import BoothSettings

logger = logging.getLogger(__name__)


def load_settings() -> BoothSettings:
    """Load user preferences from QSettings."""
    settings = QSettings("PuffyBooth", "PuffyBooth")
    data = {key: settings.value(key) for key in BoothSettings().to_dict()}
    return BoothSettings.from_dict(data)


def save_settings(booth_settings: BoothSettings):
    settings = QSettings("PuffyBooth", "PuffyBooth")
    for key, value in booth_settings.to_dict().items():
        if value is None:
            settings.remove(key)
        else:
            settings.setValue(key, value)


class BoothWindow(QMainWindow):
    """Main application window."""

    def __init__(self, camera: Optional[Camera] = None,
                 booth_settings: Optional[BoothSettings] = None):
        super().__init__()
        self.booth_settings = booth_settings or load_settings()

        self.camera = camera or OpenCVCamera(
            index=self.booth_settings.camera_index,
            width=self.booth_settings.capture_width,
            height=self.booth_settings.capture_height,
        )
        self.controller = BoothController(
            self.camera,
            QtScheduler(),
            preset=self._initial_filter(),
            background=self._initial_background(),
        )
        self._strip_dialog: Optional[StripDialog] = None

        self.setWindowTitle("PuffyBooth")
        self.setMinimumSize(560, 720)

        self._create_central_widget()
        self._create_status_bar()
        self._load_geometry()

        self.controller.add_state_callback(self._render_state)
        self._open_camera()
        self._render_state(self.controller.state)

    def _initial_filter(self) -> FilterPreset:
        try:
            return FilterPreset.from_name(self.booth_settings.filter_name)
        except ValueError:
            return FilterPreset.NONE

    def _initial_background(self) -> Background:
        try:
            return Background.from_name(self.booth_settings.background_name)
        except ValueError:
            return Background.WHITE

    def _create_central_widget(self):
        central = QWidget()
        layout = QVBoxLayout()
        layout.setSpacing(10)

        header = QLabel("PuffyBooth")
        header.setAlignment(Qt.AlignmentFlag.AlignCenter)
        header.setStyleSheet("font-size: 28pt; font-weight: bold; color: #dd8502;")
        layout.addWidget(header)

        self.error_label = QLabel()
        self.error_label.setWordWrap(True)
        self.error_label.setStyleSheet(
            "color: white; background-color: #c0392b; padding: 6px; border-radius: 4px;"
        )
        self.error_label.hide()
        layout.addWidget(self.error_label)

        self.preview = CameraPreviewWidget(self.camera, self.booth_settings.preview_fps)
        layout.addWidget(self.preview, 1)

        # Capture controls
        capture_layout = QHBoxLayout()
        self.capture_btn = QPushButton("Start Capture")
        self.capture_btn.setMinimumHeight(40)
        self.capture_btn.clicked.connect(self._on_start_capture)
        capture_layout.addWidget(self.capture_btn, 1)

        self.cancel_btn = QPushButton("Cancel")
        self.cancel_btn.setMinimumHeight(40)
        self.cancel_btn.clicked.connect(self.controller.cancel_capture)
        capture_layout.addWidget(self.cancel_btn)
        layout.addLayout(capture_layout)

        # Filters
        filter_text = QLabel("Choose a filter")
        filter_text.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(filter_text)

        filters_layout = QHBoxLayout()
        self.filter_group = QButtonGroup(self)
        self.filter_group.setExclusive(True)
        self._filter_buttons = {}
        for preset in FilterPreset:
            btn = QPushButton(preset.display_name)
            btn.setCheckable(True)
            btn.clicked.connect(
                lambda checked, p=preset: self.controller.select_filter(p)
            )
            self.filter_group.addButton(btn)
            self._filter_buttons[preset] = btn
            filters_layout.addWidget(btn)
        layout.addLayout(filters_layout)

        footer = QLabel("PuffyBooth, 2025.")
        footer.setAlignment(Qt.AlignmentFlag.AlignCenter)
        footer.setStyleSheet("color: #888; font-size: 9pt;")
        layout.addWidget(footer)

        central.setLayout(layout)
        self.setCentralWidget(central)

    def _create_status_bar(self):
        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)
        self.status_bar.showMessage("Ready")

    def _open_camera(self):
        try:
            self.camera.open()
        except CaptureError as e:
            logger.error(f"Camera unavailable: {e}")
            self._show_error(e.message)
            return
        self.preview.start()

    # State rendering

    def _render_state(self, state: BoothState):
        """Re-render the window from a booth state snapshot."""
        self.preview.render_state(state)

        self.capture_btn.setEnabled(state.phase == Phase.IDLE)
        self.capture_btn.setText("Capturing..." if state.is_capturing else "Start Capture")
        self.cancel_btn.setEnabled(state.is_capturing)

        button = self._filter_buttons.get(state.filter)
        if button is not None and not button.isChecked():
            button.setChecked(True)

        if state.error:
            self._show_error(state.error)
        else:
            self.error_label.hide()

        if state.is_capturing:
            self.status_bar.showMessage(
                f"Shot {min(len(state.shots) + 1, self.controller.sequencer.timing.shot_count)}"
                f" of {self.controller.sequencer.timing.shot_count}"
            )
        elif state.phase == Phase.IDLE:
            self.status_bar.showMessage("Ready")

        if state.result_visible:
            if self._strip_dialog is None:
                self.status_bar.showMessage("Done!")
                self._show_strip_dialog()
            else:
                self._strip_dialog.refresh()
        elif self._strip_dialog is not None:
            # The session only leaves Complete when the dialog is dismissed
            self.booth_settings.export_directory = self._strip_dialog.export_directory
            self._strip_dialog = None

    def _show_error(self, message: str):
        self.error_label.setText(message)
        self.error_label.show()

    def _show_strip_dialog(self):
        self._strip_dialog = StripDialog(
            self.controller,
            self.booth_settings.export_directory,
            self
        )
        self._strip_dialog.open()

    # Action handlers

    def _on_start_capture(self):
        if not self.controller.start_capture():
            self.status_bar.showMessage("Capture already in progress", 3000)

    # Settings

    def _load_geometry(self):
        settings = QSettings("PuffyBooth", "PuffyBooth")
        geometry = settings.value("geometry")
        if geometry:
            self.restoreGeometry(geometry)

    def _save_settings(self):
        state = self.controller.state
        self.booth_settings.filter_name = state.filter.display_name
        self.booth_settings.background_name = state.background.value
        save_settings(self.booth_settings)

        settings = QSettings("PuffyBooth", "PuffyBooth")
        settings.setValue("geometry", self.saveGeometry())

    def closeEvent(self, event):
        """Handle window close."""
        self.controller.cancel_capture()
        self.preview.stop()
        self.camera.close()
        self._save_settings()
        event.accept()
