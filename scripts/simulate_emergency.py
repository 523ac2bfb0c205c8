#!/usr/bin/env python3
"""Run a simulated patient emergency end to end.

Logs in with a demo account, opens the patient console with a simulated
GPS device, triggers the emergency and prints the console state after
every dispatch transition.

Examples:
  python scripts/simulate_emergency.py
  python scripts/simulate_emergency.py --lock-delay 1 --dispatch-delay 0.5 -v
  python scripts/simulate_emergency.py --deny-location
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from jeevansetu import (  # noqa: E402
    AuthenticationError,
    DemoAuthProvider,
    EmergencyConsole,
    JeevanSetuConfig,
    SessionStore,
    SimulatedPositionProvider,
    landing_route,
    open_store,
)
from jeevansetu.models import ConsoleView, EmergencyPhase  # noqa: E402


def _print_view(view: ConsoleView) -> None:
    print(f"[{view.phase.value:>11}] button={view.button_label!r} location={view.location_summary}")
    for entry in view.timeline:
        mark = "x" if entry.is_done else " "
        stamp = entry.display_time() or "--:--:--"
        print(f"    [{mark}] {stamp}  {entry.label}: {entry.detail}")
    if view.error:
        print(f"    error: {view.error}")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Simulate a Jeevan Setu patient emergency.")
    parser.add_argument("--phone", default="1234567890", help="Demo account phone number")
    parser.add_argument("--password", default="patient123", help="Demo account password")
    parser.add_argument("--dispatch-delay", type=float, default=None, help="Seconds until a driver is alerted")
    parser.add_argument("--lock-delay", type=float, default=None, help="Seconds until the family is notified")
    parser.add_argument("--lat", type=float, default=28.6139, help="Simulated latitude")
    parser.add_argument("--lon", type=float, default=77.2090, help="Simulated longitude")
    parser.add_argument("--accuracy", type=float, default=12.4, help="Simulated accuracy in meters")
    parser.add_argument("--deny-location", action="store_true", help="Simulate a location permission denial")
    parser.add_argument("--storage", default=None, help="JSON file for the session store")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


async def _run(args: argparse.Namespace) -> int:
    overrides: dict[str, float | str] = {"auth_delay": 0.0}
    if args.dispatch_delay is not None:
        overrides["dispatch_delay"] = args.dispatch_delay
    if args.lock_delay is not None:
        overrides["lock_delay"] = args.lock_delay
    if args.storage:
        overrides["storage_path"] = args.storage
    config = JeevanSetuConfig.from_env(**overrides)

    sessions = SessionStore(open_store(config.storage_path), ttl=config.session_ttl)
    try:
        session = await DemoAuthProvider(config).login(args.phone, args.password)
    except AuthenticationError as exc:
        print(f"Login failed: {exc}", file=sys.stderr)
        return 1
    sessions.save(session)
    print(f"Logged in as {session.role.value}; landing route {landing_route(session).value}")

    device = SimulatedPositionProvider()
    async with EmergencyConsole(session, config=config, position_provider=device) as console:
        if args.deny_location:
            device.push_error(message="User denied geolocation")
        else:
            device.push_fix(latitude=args.lat, longitude=args.lon, accuracy=args.accuracy)

        _print_view(console.view())
        last_phase = console.dispatch.phase
        console.trigger()
        while True:
            view = console.view()
            if view.phase != last_phase:
                _print_view(view)
                last_phase = view.phase
            if view.phase.is_terminal:
                break
            await asyncio.sleep(0.05)

    return 0 if last_phase is EmergencyPhase.LOCKED else 2


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())
