#!/usr/bin/env python3
"""Live smoke test against the configured Shopsense endpoint.

Reads SHOPSENSE_* settings from the environment / .env and runs one search
and one brand listing. Skips (exit 0) when the environment is not configured.
"""
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / 'src'))

from shopsense.client import ShopsenseClient  # type: ignore
from shopsense.config import config_from_env, load_env  # type: ignore
from shopsense.errors import ConfigurationError, TransportError  # type: ignore


def main() -> int:
    load_env(str(ROOT / '.env'))
    try:
        cfg = config_from_env()
    except ConfigurationError as e:
        print(f"Smoke test skipped: {e}")
        return 0

    with ShopsenseClient(cfg) as client:
        try:
            body = client.search('red dress', 0, 5)
            brands = client.get_brands()
        except TransportError as e:
            print(f"Smoke test failed: {e}")
            return 1
    if not body.strip() or not brands.strip():
        print("Smoke test failed: empty response body")
        return 1
    print(f"Smoke test ok: search returned {len(body)} chars, brands returned {len(brands)} chars")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
