"""Custom exceptions for taxtiers."""

from __future__ import annotations


class TaxTiersError(Exception):
    """Base exception for taxtiers."""


class ConfigError(TaxTiersError):
    """Missing or malformed tax-year configuration."""
