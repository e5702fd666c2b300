"""Wholesale quick-pricing engine.

This module also exposes the package version for runtime display."""

from importlib import metadata

from quickprice.engine import calculate_rates
from quickprice.models import LoanScenario, PricingResult, Program

try:
    __version__ = metadata.version("quickprice")
except metadata.PackageNotFoundError:  # pragma: no cover - during local dev
    __version__ = "0.1.0"

__all__ = ["__version__", "calculate_rates", "LoanScenario", "PricingResult", "Program"]
