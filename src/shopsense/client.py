from __future__ import annotations
import logging
from typing import Dict, Optional
from urllib.parse import quote_plus, urlencode

import requests

from .config import Operation, ShopsenseConfig
from .errors import InvalidArgument, TransportError, Unimplemented


FILTER_TYPES = ("Brand", "Retailer", "Price", "Discount", "Size", "Color")

# New - recently created looks. TopRated - recent and highly rated.
# Celebrities - owned by celebrity users. Featured - from featured stylebooks.
LOOK_TYPES = ("New", "TopRated", "Celebrities", "Featured")

log = logging.getLogger(__name__)


def build_session(cfg: ShopsenseConfig) -> requests.Session:
    s = requests.Session()
    s.headers.update(
        {
            "Accept": "application/xml" if cfg.format.lower() == "xml" else "application/json",
            "User-Agent": cfg.user_agent,
        }
    )
    return s


def _require(value: object, name: str) -> None:
    if value is None or str(value).strip() == "":
        raise InvalidArgument(f"no {name} provided!")


def build_query(params: Dict[str, object]) -> str:
    """Form-encode params in insertion order; spaces become '+'."""
    return urlencode([(str(k), str(v)) for k, v in params.items()], quote_via=quote_plus)


class ShopsenseClient:
    """Thin client for the Shopsense product API.

    Every public method issues exactly one GET and returns the body text as
    the API sent it (JSON or XML depending on ``cfg.format``). Nothing is
    parsed, cached or retried.
    """

    def __init__(self, cfg: ShopsenseConfig, session: Optional[requests.Session] = None):
        self.cfg = cfg
        self.session = session if session is not None else build_session(cfg)

    def __enter__(self) -> "ShopsenseClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def search(self, search_string: str, offset: int = 0, limit: int = 10) -> str:
        """Product search. The body lists products with id, name, price,
        retailer, brand, categories, images and a retailer forwarding URL."""
        _require(search_string, "search string")
        return self.call_api(
            Operation.SEARCH,
            {"fts": search_string, "offset": offset, "limit": limit},
        )

    def get_category_histogram(self, search_string: str) -> str:
        """Categories with product counts for the results of a query."""
        _require(search_string, "search string")
        return self.call_api(Operation.GET_CATEGORY_HISTOGRAM, {"fts": search_string})

    def get_filter_histogram(self, filter_type: str, search_string: str) -> str:
        """Counts per filter value (one of FILTER_TYPES) for the results of a query."""
        if filter_type not in FILTER_TYPES:
            raise InvalidArgument(
                f"invalid filter type {filter_type!r}, must be one of: {', '.join(FILTER_TYPES)}"
            )
        _require(search_string, "search string")
        return self.call_api(
            Operation.GET_FILTER_HISTOGRAM,
            {"fts": search_string, "filters": filter_type},
        )

    def get_brands(self) -> str:
        """Brands that have live products. Brands with very few products are omitted."""
        return self.call_api(Operation.GET_BRANDS)

    def get_look(self, look_id) -> str:
        """A single look: title, description, tags and its products."""
        _require(look_id, "look_id")
        return self.call_api(Operation.GET_LOOK, {"look": look_id})

    def get_retailers(self) -> str:
        return self.call_api(Operation.GET_RETAILERS)

    def get_stylebook(self, user_name: str, offset: int = 0, limit: int = 10) -> str:
        """A user's Stylebook and the looks within it."""
        _require(user_name, "user_name")
        return self.call_api(
            Operation.GET_STYLEBOOK,
            {"handle": user_name, "offset": offset, "limit": limit},
        )

    def get_looks(self, look_type: str, offset: int = 0, limit: int = 10) -> str:
        """Looks of the given type (one of LOOK_TYPES)."""
        if look_type not in LOOK_TYPES:
            raise InvalidArgument(
                f"invalid look type {look_type!r}, must be one of: {', '.join(LOOK_TYPES)}"
            )
        # TODO: confirm type/min/count against the live API; offset/limit may be expected instead.
        return self.call_api(
            Operation.GET_LOOKS,
            {"type": look_type, "min": offset, "count": limit},
        )

    def get_trends(self, category: str = "", products: int = 0) -> str:
        """Popular brands for a category, optionally with a sample product each.

        An empty category returns popular brands across all categories.
        """
        return self.call_api(Operation.GET_TRENDS, {"cat": category, "products": products})

    def visit_retailer(self, product_id) -> str:
        # The API answers this one with a redirect to the retailer's product
        # page rather than a JSON/XML body.
        raise Unimplemented("visit_retailer is not implemented")

    def build_url(self, operation: Operation, params: Optional[Dict[str, object]] = None) -> str:
        base_url = self.cfg.api_url + self.cfg.path_for(operation)
        args: Dict[str, object] = dict(params or {})
        args["pid"] = self.cfg.partner_id
        args["format"] = self.cfg.format
        args["site"] = self.cfg.site
        if "?" in base_url:
            if base_url.endswith("&"):
                base_url = base_url[:-1]
            base_url += "&"
        else:
            base_url += "?"
        return base_url + build_query(args)

    def call_api(self, operation: Operation, params: Optional[Dict[str, object]] = None) -> str:
        url = self.build_url(operation, params)
        log.debug(f"{operation.value}: GET {self.cfg.api_url}{self.cfg.path_for(operation)}")
        try:
            resp = self.session.get(url, timeout=self.cfg.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            # requests puts the full URL (pid included) in its messages.
            reason = e.__class__.__name__
            if e.response is not None:
                reason = f"HTTP {e.response.status_code} ({reason})"
            log.warning(f"{operation.value} failed: {reason}")
            raise TransportError(f"{operation.value} request failed: {reason}") from e
        return resp.text
