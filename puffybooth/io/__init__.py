"""
PuffyBooth I/O Module

Handles saving exported photo strips.
"""

from .export import ExportSink, FileExportSink, write_file

__all__ = ['ExportSink', 'FileExportSink', 'write_file']
