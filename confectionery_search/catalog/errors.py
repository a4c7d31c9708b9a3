"""Failure taxonomy of the catalogue client."""

from __future__ import annotations

from enum import Enum


class FailureKind(str, Enum):
    CONFIGURATION = "configuration"
    NETWORK = "network"
    DECODE = "decode"
    UNEXPECTED = "unexpected"


class CatalogError(Exception):
    kind: FailureKind = FailureKind.UNEXPECTED


class ConfigurationError(CatalogError):
    """The configured catalogue URL is not an absolute http(s) URL."""

    kind = FailureKind.CONFIGURATION


class NetworkError(CatalogError):
    """DNS, connection, timeout or non-2xx status."""

    kind = FailureKind.NETWORK


class DecodeError(CatalogError):
    """The response body is not the expected JSON document."""

    kind = FailureKind.DECODE


class UnexpectedError(CatalogError):
    kind = FailureKind.UNEXPECTED
