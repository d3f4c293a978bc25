"""
Shopsense product API client.

Each call validates its arguments, builds a query string and performs one
blocking GET, returning the raw response body (JSON or XML).

Public API:
- client.ShopsenseClient, client.FILTER_TYPES, client.LOOK_TYPES, client.build_query
- config.ShopsenseConfig, config.Operation, config.config_from_env, config.load_env, config.load_paths
- errors.ShopsenseError, errors.InvalidArgument, errors.TransportError, errors.Unimplemented, errors.ConfigurationError
"""

from . import client, config, errors  # re-export modules
from .client import FILTER_TYPES, LOOK_TYPES, ShopsenseClient
from .config import Operation, ShopsenseConfig, config_from_env
from .errors import ConfigurationError, InvalidArgument, ShopsenseError, TransportError, Unimplemented

__all__ = [
    "client",
    "config",
    "errors",
    "ShopsenseClient",
    "ShopsenseConfig",
    "Operation",
    "config_from_env",
    "FILTER_TYPES",
    "LOOK_TYPES",
    "ShopsenseError",
    "InvalidArgument",
    "TransportError",
    "Unimplemented",
    "ConfigurationError",
]
