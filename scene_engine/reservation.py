"""
Text Reservation

The canvas region kept free for the motto or logo. A scene build starts from
an empty reservation, lets one overlay component install it, then hands it
read-only to the scatter generators.
"""

from typing import Optional
import logging

from .geometry import Rect, overlap

EMPTY_RECT = Rect(-1, -1, 0, 0)


class TextReservation:
    """Write-once rectangle reserved for overlay text or logo"""

    def __init__(self, rect: Optional[Rect] = None):
        self._rect = rect or EMPTY_RECT
        self._locked = rect is not None

    @property
    def rect(self) -> Rect:
        return self._rect

    @property
    def is_empty(self) -> bool:
        return self._rect == EMPTY_RECT or self._rect.area == 0

    def reserve(self, rect: Rect) -> None:
        """Install the reserved rectangle; only the first call of a build wins"""
        if self._locked:
            logging.warning(f"Text reservation already set to {self._rect}, ignoring {rect}")
            return
        self._rect = rect
        self._locked = True

    def reset(self) -> None:
        self._rect = EMPTY_RECT
        self._locked = False

    def overlaps(self, rect: Rect) -> bool:
        return not self.is_empty and overlap(rect, self._rect)

    def __repr__(self) -> str:
        return f"TextReservation({'empty' if self.is_empty else self._rect})"
