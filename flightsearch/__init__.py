"""Recherche de vols avec validation des dates, remise et tri par prix."""

from flightsearch.models import Flight, FlightLeg, FlightQuery, FlightSegment
from flightsearch.pipeline import FlightPricingPipeline

__all__ = ["Flight", "FlightLeg", "FlightPricingPipeline", "FlightQuery", "FlightSegment"]
