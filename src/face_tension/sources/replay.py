"""Replay recorded landmark frames from a JSON-lines file.

One frame per line::

    {"timestamp": 1234.5, "landmarks": [{"x": 0.41, "y": 0.37, "z": -0.02}, ...]}
    {"timestamp": 1267.8, "landmarks": [[0.41, 0.37, -0.02], ...]}
    {"timestamp": 1301.1, "landmarks": []}

Blank lines are skipped.  Timestamps are monotonic milliseconds.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import AsyncIterator

import structlog
from pydantic import ValidationError

from face_tension.models import Frame
from face_tension.sources.base import FrameSource, FrameSourceError

logger = structlog.get_logger(__name__)


class JsonlFrameSource(FrameSource):
    """Yield frames from a recording.

    With ``realtime=True`` the source sleeps between frames so that the
    recorded cadence is reproduced; otherwise frames are delivered as fast
    as the consumer takes them.
    """

    name = "jsonl"

    def __init__(self, path: str | Path, *, realtime: bool = False) -> None:
        self._path = Path(path)
        self._realtime = realtime
        self._closed = False

    async def frames(self) -> AsyncIterator[Frame]:
        previous: float | None = None
        with self._path.open(encoding="utf-8") as fh:
            for lineno, line in enumerate(fh, start=1):
                if self._closed:
                    break
                line = line.strip()
                if not line:
                    continue
                try:
                    frame = Frame.model_validate_json(line)
                except ValidationError as exc:
                    raise FrameSourceError(f"{self._path}:{lineno}: invalid frame: {exc}") from exc

                if previous is not None and frame.timestamp < previous:
                    raise FrameSourceError(
                        f"{self._path}:{lineno}: timestamp {frame.timestamp} "
                        f"goes backwards from {previous}"
                    )
                if self._realtime and previous is not None:
                    await asyncio.sleep((frame.timestamp - previous) / 1000)
                previous = frame.timestamp
                yield frame

        logger.debug("jsonl_source.exhausted", path=str(self._path))

    async def close(self) -> None:
        self._closed = True
