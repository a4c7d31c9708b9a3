"""
Toriko integration for the catalogue.  The public confectionery API at
``sysbird.jp/toriko`` is queried anonymously with the ``guest`` key.
This module exposes two functions:

* ``load_catalog_records()`` — issue the request, decode the JSON
  document into ``CatalogResponse`` and keep only displayable records.
  Failures raise the matching ``CatalogError`` subclass.

* ``fetch_catalog()`` — the boundary used by the view-model.  It wraps
  ``load_catalog_records()`` and turns every failure into a tagged
  ``FetchOutcome`` with an empty record list, logging the cause.

Only the Python standard library is used for HTTP requests.  Nothing is
cached and nothing is retried; each call performs exactly one GET.
"""

from __future__ import annotations

import http.client
import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, List, Optional

from pydantic import ValidationError

from ..config import CatalogSettings
from .errors import (
    CatalogError,
    ConfigurationError,
    DecodeError,
    NetworkError,
    UnexpectedError,
)
from .schemas import CatalogRecord, CatalogResponse, FetchOutcome


logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


def _checked_url(settings: CatalogSettings) -> str:
    """Build the request URL and make sure it is an absolute http(s) URL."""
    url = settings.build_url()
    parts = urllib.parse.urlsplit(url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigurationError(f"Invalid catalogue URL: {url!r}")
    return url


def _http_get_json(url: str, settings: CatalogSettings) -> Any:
    """Perform an HTTP GET and return the parsed JSON body.

    Transport problems and non-2xx statuses raise ``NetworkError``; a
    body that is not JSON raises ``DecodeError``.
    """
    request = urllib.request.Request(
        url,
        headers={
            'User-Agent': settings.user_agent,
            'Accept': 'application/json',
        },
    )
    try:
        with urllib.request.urlopen(request, timeout=settings.timeout) as response:
            status = getattr(response, 'status', 200)
            if not 200 <= status < 300:
                raise NetworkError(f"Catalogue request returned status {status}")
            data = response.read().decode('utf-8', errors='ignore')
    except urllib.error.HTTPError as exc:
        raise NetworkError(f"Catalogue request returned status {exc.code}") from exc
    except urllib.error.URLError as exc:
        raise NetworkError(f"Could not reach catalogue: {exc.reason}") from exc
    except (OSError, http.client.HTTPException) as exc:
        # socket timeouts and connection resets land here
        raise NetworkError(f"Catalogue transport error: {exc}") from exc
    try:
        return json.loads(data)
    except ValueError as exc:
        raise DecodeError(f"Response is not JSON: {exc}") from exc


def decode_catalog(payload: Any) -> CatalogResponse:
    """Validate a parsed JSON payload against ``CatalogResponse``."""
    try:
        return CatalogResponse.model_validate(payload)
    except ValidationError as exc:
        raise DecodeError(
            f"Response does not match the catalogue schema ({exc.error_count()} errors)"
        ) from exc


def displayable_records(records: List[CatalogRecord]) -> List[CatalogRecord]:
    """Keep records with a non-empty name, url and image, in order."""
    return [record for record in records if record.is_displayable]


def load_catalog_records(settings: Optional[CatalogSettings] = None) -> List[CatalogRecord]:
    settings = settings or CatalogSettings()
    url = _checked_url(settings)
    try:
        payload = _http_get_json(url, settings)
        response = decode_catalog(payload)
    except CatalogError:
        raise
    except Exception as exc:
        raise UnexpectedError(str(exc)) from exc
    records = displayable_records(response.item)
    logger.info(
        "Fetched %s catalogue items, %s displayable", len(response.item), len(records)
    )
    return records


def fetch_catalog(settings: Optional[CatalogSettings] = None) -> FetchOutcome:
    """Fetch the catalogue and return a tagged outcome.

    Never raises for ordinary failures: callers get an empty record list
    together with the failure kind.
    """
    try:
        records = load_catalog_records(settings)
    except ConfigurationError as exc:
        logger.error("Catalogue misconfigured: %s", exc)
        return FetchOutcome.failed(exc.kind, str(exc))
    except (NetworkError, DecodeError) as exc:
        logger.warning("Catalogue fetch failed (%s): %s", exc.kind.value, exc)
        return FetchOutcome.failed(exc.kind, str(exc))
    except CatalogError as exc:
        logger.exception("Unexpected error while fetching the catalogue: %s", exc)
        return FetchOutcome.failed(exc.kind, str(exc))
    return FetchOutcome(records=records)
