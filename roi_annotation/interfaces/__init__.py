"""
Interfaces module - UI adapters for annotation core.

Provides adapters to connect the core annotation logic
with drawing surfaces (numpy images, OpenCV windows, etc).
"""

from .canvas_adapter import CanvasAdapter, ImageSurface, issue_commands

__all__ = ['CanvasAdapter', 'ImageSurface', 'issue_commands']
