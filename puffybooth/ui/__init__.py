"""
PuffyBooth UI Module

User interface components:
- BoothWindow: Primary application window
- CameraPreviewWidget: Live camera view (see widgets)
- StripDialog: Result view with background choice and download
- QtScheduler: Capture timers on the Qt event loop
"""
