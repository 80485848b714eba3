"""Application entrypoint — replay recordings or inspect configuration."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

from face_tension.config import get_settings
from face_tension.logger import setup_logging
from face_tension.notifications import create_dispatcher
from face_tension.pipeline import TensionPipeline
from face_tension.sources import FrameSourceError, JsonlFrameSource
from face_tension.streaming import FrameRunner


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="face-tension",
        description="Facial tension monitor driven by face landmark streams.",
    )
    sub = parser.add_subparsers(dest="command")

    # ── replay ────────────────────────────────────────────────
    replay_parser = sub.add_parser("replay", help="Replay a JSON-lines landmark recording.")
    replay_parser.add_argument("path", help="Recording with one frame per line.")
    replay_parser.add_argument(
        "--calibrate-at",
        type=float,
        default=None,
        help="Start calibration at this timestamp (ms). Default: first frame.",
    )
    replay_parser.add_argument("--webhook", default=None, help="POST alerts to this URL.")
    replay_parser.add_argument(
        "--realtime", action="store_true", help="Reproduce the recorded frame cadence.",
    )

    # ── show-config ───────────────────────────────────────────
    sub.add_parser("show-config", help="Print the resolved settings.")

    args = parser.parse_args(argv)
    settings = get_settings()
    setup_logging(settings.log_level)

    if args.command == "replay":
        if args.webhook:
            settings = settings.model_copy(update={"webhook_url": args.webhook})

        pipeline = TensionPipeline.from_settings(settings)
        dispatcher = create_dispatcher(settings)
        runner = FrameRunner(
            pipeline,
            JsonlFrameSource(args.path, realtime=args.realtime),
            calibrate_at=args.calibrate_at,
            dispatcher=dispatcher,
        )

        try:
            summary = asyncio.run(runner.run())
        except (FrameSourceError, OSError) as exc:
            print(f"error: {exc}", file=sys.stderr)
            sys.exit(2)

        print(json.dumps(
            {
                "frames": summary.frames,
                "baseline_established": summary.baseline_established,
                "alerts": [a.timestamp for a in summary.alerts],
                "channels": dispatcher.handler_names,
                "undelivered": summary.undelivered,
                "statuses": {s.value: n for s, n in summary.statuses.items()},
            },
            indent=2,
        ))
    elif args.command == "show-config":
        print(settings.model_dump_json(indent=2))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
