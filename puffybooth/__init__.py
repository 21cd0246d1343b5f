"""
PuffyBooth - a desktop photo booth.

Runs a timed four-shot capture sequence against a camera and composes
the shots into a downloadable photo strip.
"""

__version__ = "0.1.0"
