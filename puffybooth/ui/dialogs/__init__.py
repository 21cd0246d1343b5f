"""
PuffyBooth Dialogs
"""

from .strip_dialog import StripDialog, DialogExportSink

__all__ = ['StripDialog', 'DialogExportSink']
