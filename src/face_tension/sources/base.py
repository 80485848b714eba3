"""Abstract base class for landmark frame sources."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AsyncIterator, Iterable

from face_tension.models import Frame


class FrameSourceError(Exception):
    """Raised when a source delivers data that cannot be parsed into frames."""


class FrameSource(ABC):
    """Contract for anything that delivers landmark frames.

    A source yields :class:`Frame` objects in timestamp order, one per tick.
    A frame with no landmarks means no face was found and is not an error.
    Capture devices and landmark models live behind this interface.
    """

    name: str = "base"

    @abstractmethod
    def frames(self) -> AsyncIterator[Frame]:
        """Yield frames until the source is exhausted or closed."""

    async def close(self) -> None:
        """Release any resources held by the source."""


class StaticFrameSource(FrameSource):
    """Serve a fixed, in-memory list of frames (tests and tooling)."""

    name = "static"

    def __init__(self, frames: Iterable[Frame]) -> None:
        self._frames = list(frames)

    async def frames(self) -> AsyncIterator[Frame]:
        for frame in self._frames:
            yield frame
