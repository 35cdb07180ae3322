"""Pipeline de recherche de vols : validation des dates, recherche, remise, tri."""

import asyncio
import logging
from datetime import datetime
from typing import List
from flightsearch.dates import SEARCH_DATE_FORMAT, Clock, DateValidator, utc_now
from flightsearch.errors import InvalidQueryError, UpstreamUnavailableError
from flightsearch.models import Flight, FlightQuery
from flightsearch.providers.base import FlightProvider

logger = logging.getLogger(__name__)

DISCOUNT_RATE = 0.10
DISCOUNT_MIN_DAYS = 10  # Remise au-delà de 10 jours de séjour (strictement)


class FlightPricingPipeline:
    """Orchestre une recherche de vols de bout en bout."""

    def __init__(self, provider: FlightProvider, clock: Clock = utc_now):
        """
        Initialise le pipeline.

        Args:
            provider: Provider de vols interrogé à chaque recherche
            clock: Fonction retournant l'instant courant (UTC)
        """
        self.provider = provider
        self.dates = DateValidator(SEARCH_DATE_FORMAT, clock=clock)

    async def search(self, query: FlightQuery) -> List[Flight]:
        """
        Recherche des vols, applique la remise éventuelle et trie par prix.

        Args:
            query: Paramètres de recherche

        Returns:
            Vols triés par prix remisé croissant

        Raises:
            InvalidDateError: Si une date ne respecte pas le format yyyy-MM-dd
            InvalidQueryError: Si les dates violent les règles de recherche
            UpstreamUnavailableError: Si le provider échoue
        """
        departure_date = self.dates.parse_date(query.departure_date)
        return_date = self.dates.parse_date(query.return_date)

        self.validate_dates(self.dates, departure_date, return_date)

        try:
            flights = await self.provider.search_flights(query)
        except (Exception, asyncio.CancelledError) as e:
            logger.error(
                f"Erreur du provider pour {query.origin}->{query.destination} "
                f"du {query.departure_date} au {query.return_date}: {e!r}",
                exc_info=True
            )
            raise UpstreamUnavailableError("Flight data service is not available") from e

        if self.should_apply_discount(self.dates, departure_date, return_date):
            for flight in flights:
                flight.apply_discount(DISCOUNT_RATE)
            logger.info(f"Remise de {DISCOUNT_RATE:.0%} appliquée à {len(flights)} vols")

        return self.sort_flights(flights)

    @staticmethod
    def validate_dates(dates: DateValidator, departure_date: datetime, return_date: datetime):
        """
        Vérifie que les deux dates sont futures et que le retour suit le départ.

        Raises:
            InvalidQueryError: Première règle violée
        """
        if dates.is_past_date(departure_date):
            raise InvalidQueryError("departureDate must be in the future")

        if dates.is_past_date(return_date):
            raise InvalidQueryError("returnDate must be in the future")

        if dates.is_on_or_before_date(return_date, departure_date):
            raise InvalidQueryError("returnDate must be after departureDate")

    @staticmethod
    def should_apply_discount(dates: DateValidator, departure_date: datetime, return_date: datetime) -> bool:
        """Indique si le séjour est assez long pour bénéficier de la remise."""
        return dates.days_between(departure_date, return_date) > DISCOUNT_MIN_DAYS

    @staticmethod
    def sort_flights(flights: List[Flight], descending: bool = False) -> List[Flight]:
        """Trie par prix remisé ; l'ordre du provider est conservé à prix égal."""
        return sorted(flights, key=lambda flight: flight.price_after_discount, reverse=descending)
