from __future__ import annotations
import json
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigurationError


class Operation(str, Enum):
    SEARCH = "search"
    GET_CATEGORY_HISTOGRAM = "get_category_histogram"
    GET_FILTER_HISTOGRAM = "get_filter_histogram"
    GET_BRANDS = "get_brands"
    GET_LOOK = "get_look"
    GET_RETAILERS = "get_retailers"
    GET_STYLEBOOK = "get_stylebook"
    GET_LOOKS = "get_looks"
    GET_TRENDS = "get_trends"


DEFAULT_FORMAT = "json"
DEFAULT_USER_AGENT = "shopsense-python/1.0"


@dataclass(frozen=True)
class ShopsenseConfig:
    api_url: str
    partner_id: str
    site: str
    paths: Mapping[Operation, str] = field(default_factory=dict)
    format: str = DEFAULT_FORMAT
    timeout: Optional[float] = None
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        # Accept plain operation names as keys and freeze the table.
        try:
            table = {Operation(k): v for k, v in dict(self.paths).items()}
        except ValueError as e:
            raise ConfigurationError(f"Unknown operation in path table: {e}") from None
        object.__setattr__(self, "paths", MappingProxyType(table))

    def path_for(self, operation: Operation) -> str:
        try:
            return self.paths[operation]
        except KeyError:
            raise ConfigurationError(f"No path configured for operation '{operation.value}'") from None


def load_env(dotenv_path: Optional[str] = None) -> None:
    """Load a .env file into os.environ without overriding variables already set.

    With no explicit path, the .env in the current directory is used when present.
    """
    if dotenv_path is None:
        default_env = Path.cwd() / ".env"
        if default_env.exists():
            load_dotenv(default_env)
        return
    p = Path(dotenv_path)
    if p.exists():
        load_dotenv(p)


def load_paths(path: Path) -> Dict[Operation, str]:
    """Read a JSON object mapping operation names to URL path fragments."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ConfigurationError(f"Paths file not found: {path}") from None
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Paths file is not valid JSON: {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Paths file must contain a JSON object: {path}")
    out: Dict[Operation, str] = {}
    for name, fragment in data.items():
        try:
            op = Operation(name)
        except ValueError:
            raise ConfigurationError(f"Unknown operation in paths file: {name}") from None
        out[op] = str(fragment)
    return out


def config_from_env(env: Optional[Mapping[str, str]] = None) -> ShopsenseConfig:
    """Build a config from SHOPSENSE_* variables.

    Paths come from the JSON file named by SHOPSENSE_PATHS_FILE, then
    SHOPSENSE_<OPERATION>_PATH variables override individual entries.
    """
    env = os.environ if env is None else env
    api_url = (env.get("SHOPSENSE_API_URL") or "").strip()
    partner_id = (env.get("SHOPSENSE_PARTNER_ID") or "").strip()

    missing = []
    if not api_url:
        missing.append("SHOPSENSE_API_URL")
    if not partner_id:
        missing.append("SHOPSENSE_PARTNER_ID")
    if missing:
        raise ConfigurationError(f"Missing required config: {', '.join(missing)}")

    paths: Dict[Operation, str] = {}
    paths_file = (env.get("SHOPSENSE_PATHS_FILE") or "").strip()
    if paths_file:
        paths.update(load_paths(Path(paths_file).expanduser()))
    for op in Operation:
        override = env.get(f"SHOPSENSE_{op.name}_PATH")
        if override:
            paths[op] = override.strip()

    timeout_raw = (env.get("SHOPSENSE_TIMEOUT") or "").strip()
    try:
        timeout = float(timeout_raw) if timeout_raw else None
    except ValueError:
        raise ConfigurationError(f"SHOPSENSE_TIMEOUT must be a number, got {timeout_raw!r}") from None

    return ShopsenseConfig(
        api_url=api_url,
        partner_id=partner_id,
        site=(env.get("SHOPSENSE_SITE") or "").strip(),
        paths=paths,
        format=(env.get("SHOPSENSE_FORMAT") or DEFAULT_FORMAT).strip(),
        timeout=timeout,
    )
