"""Command line entry point for Refill: search restaurants, show and submit amenity reports."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from refill.config import Settings
from refill.models import AmenityReport, Location, Restaurant
from refill.scoring import get_score_color, get_score_label
from refill.services import Services, create_services

ANSWERS = {"yes": True, "no": False, "idk": None}


def restaurant_payload(restaurant: Restaurant) -> dict:
    payload = restaurant.model_dump(mode="json", by_alias=True)
    if restaurant.score is not None:
        payload["scoreLabel"] = get_score_label(restaurant.score)
        payload["scoreColor"] = get_score_color(restaurant.score).value
    return payload


def build_report(args: argparse.Namespace) -> AmenityReport:
    return AmenityReport(
        free_refills=ANSWERS[args.refills],
        bread_basket=ANSWERS[args.bread],
        pay_at_table=ANSWERS[args.pay],
        attendant=ANSWERS[args.attendant],
        base_score=args.base_score,
    )


async def run_command(args: argparse.Namespace, services: Services) -> dict:
    restaurants = services.restaurants

    if args.command == "nearby":
        results = await restaurants.load_nearby(Location(latitude=args.lat, longitude=args.lng), args.radius)
        return {"restaurants": [restaurant_payload(r) for r in results]}

    if args.command == "search":
        location = Location(latitude=args.lat, longitude=args.lng) if args.lat is not None and args.lng is not None else None
        results = await restaurants.search(args.query, location, limit=args.limit)
        return {"restaurants": [restaurant_payload(r) for r in results]}

    if args.command == "show":
        amenities = await services.amenities.get_amenities(args.place_id)
        data = (await services.amenities.get_multiple_amenities([args.place_id])).get(args.place_id)
        return {
            "placeId": args.place_id,
            "amenities": amenities.model_dump(mode="json", by_alias=True) if amenities else None,
            "score": data.score if data else None,
        }

    if args.command == "report":
        ok = await services.amenities.submit_report(args.place_id, build_report(args))
        if not ok:
            return {"placeId": args.place_id, "success": False, "message": "Failed to submit report. Please try again."}
        data = (await services.amenities.get_multiple_amenities([args.place_id])).get(args.place_id)
        return {
            "placeId": args.place_id,
            "success": True,
            "score": data.score if data else None,
            "amenities": data.amenities.model_dump(mode="json", by_alias=True) if data else None,
        }

    raise ValueError(f"Unknown command: {args.command}")


async def run(args: argparse.Namespace, settings: Optional[Settings] = None) -> dict:
    settings = settings or Settings.from_env()
    if args.mock_data:
        settings = replace(settings, use_mock_data=True)
    async with create_services(settings) as services:
        return await run_command(args, services)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Crowd-sourced restaurant amenity reports")
    parser.add_argument("--mock-data", action="store_true", help="Use mock restaurants and an in-memory store")
    parser.add_argument("--log-level", type=str, default="INFO", help="Logging level")
    sub = parser.add_subparsers(dest="command", required=True)

    nearby = sub.add_parser("nearby", help="Restaurants near a point")
    nearby.add_argument("lat", type=float)
    nearby.add_argument("lng", type=float)
    nearby.add_argument("--radius", type=int, default=None, help="Search radius in meters")

    search = sub.add_parser("search", help="Text search for restaurants")
    search.add_argument("query")
    search.add_argument("--lat", type=float, default=None)
    search.add_argument("--lng", type=float, default=None)
    search.add_argument("--limit", type=int, default=5)

    show = sub.add_parser("show", help="Community amenity data for a place")
    show.add_argument("place_id")

    report = sub.add_parser("report", help="Submit an amenity report")
    report.add_argument("place_id")
    for flag in ("refills", "bread", "pay", "attendant"):
        report.add_argument(f"--{flag}", choices=sorted(ANSWERS), default="idk")
    report.add_argument("--base-score", type=float, default=None, help="Baseline experience rating (0-10)")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
    result = asyncio.run(run(args))
    print(json.dumps(result, indent=2))
    return 1 if result.get("success") is False else 0


if __name__ == "__main__":
    sys.exit(main())
