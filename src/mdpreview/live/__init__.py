"""Live update support for open preview pages."""

from mdpreview.live.update import LiveUpdateChannel, LiveUpdateManager

__all__ = ["LiveUpdateChannel", "LiveUpdateManager"]
