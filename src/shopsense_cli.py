#!/usr/bin/env python3
import argparse
import logging
import os
import sys
from dataclasses import replace
from typing import List, Optional

from shopsense.client import FILTER_TYPES, LOOK_TYPES, ShopsenseClient
from shopsense.config import ShopsenseConfig, config_from_env, load_env
from shopsense.errors import ShopsenseError


def fail(msg: str) -> int:
    print(f"Error: {msg}", file=sys.stderr)
    return 1


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Query the Shopsense product API and print the raw response.")
    p.add_argument("--env-file", dest="dotenv", help="Path to a .env file (default: ./.env when present)")
    p.add_argument("--api-url", help="Base API URL (or SHOPSENSE_API_URL)")
    p.add_argument("--partner-id", help="Partner identifier sent as pid (or SHOPSENSE_PARTNER_ID)")
    p.add_argument("--format", choices=["json", "xml"], help="Response format (or SHOPSENSE_FORMAT, default: json)")
    p.add_argument("--site", help="Site identifier (or SHOPSENSE_SITE)")
    p.add_argument("--paths-file", help="JSON file mapping operation names to URL paths (or SHOPSENSE_PATHS_FILE)")
    p.add_argument("--timeout", type=float, help="HTTP timeout seconds (or SHOPSENSE_TIMEOUT; default: none)")
    p.add_argument("-v", "--verbose", action="count", default=0, help="-v for INFO, -vv for DEBUG")

    sub = p.add_subparsers(dest="command", required=True)

    s = sub.add_parser("search", help="Search products")
    s.add_argument("query")
    s.add_argument("--offset", type=int, default=0)
    s.add_argument("--limit", type=int, default=10)

    s = sub.add_parser("category-histogram", help="Category counts for a query")
    s.add_argument("query")

    s = sub.add_parser("filter-histogram", help="Filter value counts for a query")
    s.add_argument("filter_type", help=f"One of: {', '.join(FILTER_TYPES)}")
    s.add_argument("query")

    sub.add_parser("brands", help="List brands with live products")
    sub.add_parser("retailers", help="List retailers with live products")

    s = sub.add_parser("look", help="Fetch a single look")
    s.add_argument("look_id")

    s = sub.add_parser("stylebook", help="Fetch a user's Stylebook")
    s.add_argument("user_name")
    s.add_argument("--offset", type=int, default=0)
    s.add_argument("--limit", type=int, default=10)

    s = sub.add_parser("looks", help="List looks of a given type")
    s.add_argument("look_type", help=f"One of: {', '.join(LOOK_TYPES)}")
    s.add_argument("--offset", type=int, default=0)
    s.add_argument("--limit", type=int, default=10)

    s = sub.add_parser("trends", help="Popular brands, optionally for one category")
    s.add_argument("--category", default="")
    s.add_argument("--products", type=int, default=0, help="Sample products per trend")

    s = sub.add_parser("visit-retailer", help="Retailer redirect for a product (not implemented)")
    s.add_argument("product_id")
    return p.parse_args(argv)


def get_config(args: argparse.Namespace) -> ShopsenseConfig:
    # Flags win over the environment.
    env = dict(os.environ)
    for flag, var in (
        ("api_url", "SHOPSENSE_API_URL"),
        ("partner_id", "SHOPSENSE_PARTNER_ID"),
        ("format", "SHOPSENSE_FORMAT"),
        ("site", "SHOPSENSE_SITE"),
        ("paths_file", "SHOPSENSE_PATHS_FILE"),
    ):
        value = getattr(args, flag)
        if value:
            env[var] = value
    cfg = config_from_env(env)
    if args.timeout is not None:
        cfg = replace(cfg, timeout=args.timeout)
    return cfg


def run_command(client: ShopsenseClient, args: argparse.Namespace) -> str:
    cmd = args.command
    if cmd == "search":
        return client.search(args.query, args.offset, args.limit)
    if cmd == "category-histogram":
        return client.get_category_histogram(args.query)
    if cmd == "filter-histogram":
        return client.get_filter_histogram(args.filter_type, args.query)
    if cmd == "brands":
        return client.get_brands()
    if cmd == "retailers":
        return client.get_retailers()
    if cmd == "look":
        return client.get_look(args.look_id)
    if cmd == "stylebook":
        return client.get_stylebook(args.user_name, args.offset, args.limit)
    if cmd == "looks":
        return client.get_looks(args.look_type, args.offset, args.limit)
    if cmd == "trends":
        return client.get_trends(args.category, args.products)
    if cmd == "visit-retailer":
        return client.visit_retailer(args.product_id)
    raise SystemExit(f"Unknown command: {cmd}")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")
    log = logging.getLogger(__name__)
    load_env(args.dotenv)

    try:
        cfg = get_config(args)
    except ShopsenseError as e:
        return fail(str(e))
    log.info(f"Using api_url={cfg.api_url} format={cfg.format} site={cfg.site or '(none)'}")

    with ShopsenseClient(cfg) as client:
        try:
            body = run_command(client, args)
        except ShopsenseError as e:
            return fail(str(e))
    sys.stdout.write(body)
    if not body.endswith("\n"):
        sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
