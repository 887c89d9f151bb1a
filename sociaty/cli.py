"""
Command line front end for the offline LocalMarket.

Usage:
    sociaty-local register "Ana Lee" S1001 secret
    sociaty-local login S1001 secret
    sociaty-local publish "Desk lamp" --price 15 --category home --image lamp.png
    sociaty-local listings
    sociaty-local whoami
    sociaty-local logout
"""
import argparse
import json
import mimetypes
import sys
from pathlib import Path
from typing import List, Optional

from sociaty.services.local_market import JsonFileStorage, LocalMarket, NotLoggedInError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Offline Sociaty marketplace")
    parser.add_argument(
        "--storage",
        type=Path,
        default=None,
        help="Key/value JSON file (defaults to SOCIATY_LOCAL_STORE_FILE)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    register = sub.add_parser("register", help="Create an account and log in")
    register.add_argument("name")
    register.add_argument("student_id")
    register.add_argument("password")

    login = sub.add_parser("login", help="Log in as an existing student")
    login.add_argument("student_id")
    login.add_argument("password")

    sub.add_parser("logout", help="Forget the current student")
    sub.add_parser("whoami", help="Show the current student")
    sub.add_parser("listings", help="Print all listings, newest first")

    publish = sub.add_parser("publish", help="Publish a listing as the current student")
    publish.add_argument("title")
    publish.add_argument("--desc", default="")
    publish.add_argument("--price", default="0")
    publish.add_argument("--category", default=None)
    publish.add_argument("--image", type=Path, default=None)

    return parser


def _print(payload) -> None:
    print(json.dumps(payload, indent=2))


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    market = LocalMarket(JsonFileStorage(args.storage) if args.storage else None)

    if args.command == "register":
        result = market.register(args.name, args.student_id, args.password)
        _print(result)
        return 0 if result["ok"] else 1

    if args.command == "login":
        result = market.login(args.student_id, args.password)
        _print(result)
        return 0 if result["ok"] else 1

    if args.command == "logout":
        market.logout()
        return 0

    if args.command == "whoami":
        _print(market.current())
        return 0

    if args.command == "listings":
        _print(market.listings())
        return 0

    # publish
    image = None
    image_type = "application/octet-stream"
    if args.image:
        image = args.image.read_bytes()
        image_type = mimetypes.guess_type(args.image.name)[0] or image_type

    try:
        item = market.publish(
            args.title,
            desc=args.desc,
            price=args.price,
            category=args.category,
            image=image,
            image_type=image_type,
        )
    except NotLoggedInError as e:
        print(str(e), file=sys.stderr)
        return 1

    _print(item)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
