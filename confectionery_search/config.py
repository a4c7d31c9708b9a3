"""
Fixed configuration for the confectionery catalogue.

The catalogue endpoint and its query parameters are constants: the
front-end always asks for up to 100 items in random order using the
public ``guest`` key.  ``CatalogSettings`` bundles them so that tests
can point the client somewhere else without touching module globals.
"""

from __future__ import annotations

import logging
import urllib.parse
from typing import Dict

from pydantic import BaseModel, Field


TORIKO_ENDPOINT = "https://sysbird.jp/toriko/api/"


class CatalogSettings(BaseModel):
    """Connection settings for the Toriko catalogue API."""

    endpoint: str = TORIKO_ENDPOINT
    api_key: str = "guest"
    response_format: str = "json"
    # ``r`` asks the API for a random order
    order: str = "r"
    max_items: int = Field(default=100, ge=1, le=100)
    timeout: float = Field(default=10.0, gt=0)
    user_agent: str = "confectionery-search/1.0"

    def query_params(self) -> Dict[str, str]:
        return {
            "apikey": self.api_key,
            "format": self.response_format,
            "order": self.order,
            "max": str(self.max_items),
        }

    def build_url(self) -> str:
        """Return the full request URL, endpoint plus encoded query."""
        return f"{self.endpoint}?{urllib.parse.urlencode(self.query_params())}"


def configure_logging(level: int = logging.INFO) -> None:
    """Attach a stream handler to the package logger once."""
    package_logger = logging.getLogger("confectionery_search")
    package_logger.setLevel(level)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        package_logger.addHandler(handler)
