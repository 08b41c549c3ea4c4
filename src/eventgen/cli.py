"""
eventgen CLI entrypoint.

This CLI is intended for quick local demos and debugging of passive generation:
- `viewport`: derive center/radius from two map corners
- `evaluate`: run the admission policy on raw numbers
- `generate`: run the full orchestrator against in-memory stores
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter

from eventgen.config.settings import get_settings
from eventgen.core.geo import GeoPoint, ViewportGeometry, to_viewport_geometry
from eventgen.core.logging import configure_logging
from eventgen.core.time import now_ms
from eventgen.domain.errors import EventGenError
from eventgen.domain.models import Event, UserProfile
from eventgen.generation.fake import FakeChatCompletionService
from eventgen.generation.generator import ChatEventGenerator
from eventgen.generation.openai import OpenAIChatService
from eventgen.orchestration.orchestrator import AIEventGenOrchestrator
from eventgen.policy.passive import Accept, PassiveAIGenPolicy
from eventgen.repositories.memory import InMemoryEventRepository, InMemoryUserRepository


def _viewport_from_args(args: argparse.Namespace) -> ViewportGeometry:
    return ViewportGeometry(
        center_lat=float(args.center_lat),
        center_lon=float(args.center_lon),
        radius_km=float(args.radius_km),
    )


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _cmd_viewport(args: argparse.Namespace) -> int:
    far_left = GeoPoint(lat=float(args.far_left[0]), lon=float(args.far_left[1]))
    near_right = GeoPoint(lat=float(args.near_right[0]), lon=float(args.near_right[1]))
    vp = to_viewport_geometry(far_left, near_right)
    _print_json({"center_lat": vp.center_lat, "center_lon": vp.center_lon, "radius_km": vp.radius_km})
    return 0


def _cmd_evaluate(args: argparse.Namespace) -> int:
    """Handle the `evaluate` subcommand."""
    policy = PassiveAIGenPolicy(get_settings().policy)
    now = int(args.now_ms) if args.now_ms is not None else now_ms()
    decision = policy.evaluate(_viewport_from_args(args), int(args.existing), int(args.last_gen_ms), now)
    if isinstance(decision, Accept):
        _print_json({"decision": "accept", "events_to_generate": decision.events_to_generate})
    else:
        _print_json({"decision": "reject"})
    return 0


def _cmd_generate(args: argparse.Namespace) -> int:
    """Handle the `generate` subcommand."""
    settings = get_settings()
    user = UserProfile.model_validate_json(Path(args.user_json).read_text(encoding="utf-8"))

    existing: list[Event] = []
    if args.events_json:
        raw = Path(args.events_json).read_text(encoding="utf-8")
        existing = TypeAdapter(list[Event]).validate_json(raw)

    service = FakeChatCompletionService() if args.fake else OpenAIChatService(settings.openai)
    events = InMemoryEventRepository(existing)
    orchestrator = AIEventGenOrchestrator(
        ChatEventGenerator(service, settings),
        events,
        InMemoryUserRepository([user]),
        PassiveAIGenPolicy(settings.policy),
        settings=settings,
    )

    now = int(args.now_ms) if args.now_ms is not None else now_ms()
    generated = asyncio.run(
        orchestrator.maybe_generate(user.uid, _viewport_from_args(args), int(args.last_gen_ms), now)
    )
    _print_json([e.model_dump(mode="json") for e in generated])
    return 0


def _add_viewport_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--center-lat", required=True, type=float)
    p.add_argument("--center-lon", required=True, type=float)
    p.add_argument("--radius-km", required=True, type=float)
    p.add_argument("--last-gen-ms", type=int, default=0, help="Epoch ms of the previous generation.")
    p.add_argument("--now-ms", type=int, default=None, help="Epoch ms to evaluate at (default: wall clock).")


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the eventgen CLI."""
    parser = argparse.ArgumentParser(prog="eventgen")
    parser.add_argument("--log-level", default=None, help="Override the configured log level.")
    sub = parser.add_subparsers(dest="command", required=True)

    vp = sub.add_parser("viewport", help="Derive viewport center/radius from two diagonal corners.")
    vp.add_argument("--far-left", required=True, nargs=2, type=float, metavar=("LAT", "LON"))
    vp.add_argument("--near-right", required=True, nargs=2, type=float, metavar=("LAT", "LON"))
    vp.set_defaults(func=_cmd_viewport)

    ev = sub.add_parser("evaluate", help="Run the passive generation admission policy.")
    _add_viewport_args(ev)
    ev.add_argument("--existing", type=int, default=0, help="Events already inside the viewport.")
    ev.set_defaults(func=_cmd_evaluate)

    gen = sub.add_parser("generate", help="Run the orchestrator against in-memory stores.")
    _add_viewport_args(gen)
    gen.add_argument("--user-json", required=True, help="Path to a UserProfile JSON document.")
    gen.add_argument("--events-json", default=None, help="Optional JSON list of existing events.")
    gen.add_argument("--fake", action="store_true", help="Use the offline fake AI service.")
    gen.set_defaults(func=_cmd_generate)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m eventgen.cli`."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    func: Any = getattr(args, "func")
    try:
        return int(func(args))
    except EventGenError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
