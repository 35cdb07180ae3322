"""Providers de vols."""

from .base import FlightProvider
from .skyscanner import SkyscannerFlightProvider

__all__ = ["FlightProvider", "SkyscannerFlightProvider"]
