"""Provider Skyscanner (RapidAPI) pour la recherche de vols aller-retour."""

import aiohttp
import asyncio
import logging
from typing import List, Optional
from flightsearch.config import RapidAPIConfig
from flightsearch.errors import ProviderError
from flightsearch.models import Flight, FlightLeg, FlightQuery, FlightSegment

logger = logging.getLogger(__name__)


class SkyscannerFlightProvider:
    """Provider pour l'API Skyscanner exposée par RapidAPI."""

    def __init__(self, config: RapidAPIConfig):
        """
        Initialise le provider Skyscanner.

        Args:
            config: Configuration RapidAPI avec clé API
        """
        if not config.api_key:
            raise ValueError("RAPID_API_KEY doit être défini dans .env")
        self.config = config
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Obtient ou crée une session HTTP."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.request_timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def close(self):
        """Ferme la session HTTP."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def search_flights(self, query: FlightQuery) -> List[Flight]:
        """
        Recherche des vols aller-retour.

        Args:
            query: Paramètres de recherche (dates transmises telles quelles)

        Returns:
            Liste de vols trouvés, sans doublons

        Raises:
            ProviderError: Erreur réseau, timeout, statut HTTP inattendu ou réponse illisible
        """
        session = await self._get_session()
        url = f"{self.config.base_url}{self.config.roundtrip_url}"

        headers = {
            "x-rapidapi-host": self.config.api_host,
            "X-RapidAPI-Key": self.config.api_key
        }

        # Skyscanner nomme inDate/outDate l'aller et le retour
        params = query.to_params()
        params["inDate"] = params.pop("departureDate")
        params["outDate"] = params.pop("returnDate")

        try:
            async with session.get(url, headers=headers, params=params) as response:
                if response.status != 200:
                    error_text = await response.text()
                    raise ProviderError(f"Erreur API Skyscanner: {response.status} - {error_text}")
                data = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            # ValueError : corps non JSON (json.JSONDecodeError)
            raise ProviderError(f"Erreur lors de la recherche de vols Skyscanner: {e!r}") from e

        try:
            flights = self._parse_flights(data)
        except (KeyError, TypeError, ValueError) as e:
            raise ProviderError(f"Réponse Skyscanner illisible: {e!r}") from e

        logger.info(f"Parsé {len(flights)} vols pour {query.origin} -> {query.destination}")
        return flights

    def _parse_flights(self, data: dict) -> List[Flight]:
        """
        Parse la réponse JSON de Skyscanner en objets Flight.

        Seul le premier bucket est lu ; un id déjà vu est ignoré.

        Args:
            data: Réponse JSON de l'API

        Returns:
            Liste de vols parsés
        """
        try:
            items = data["data"]["itineraries"]["buckets"][0]["items"]
        except (KeyError, IndexError, TypeError):
            logger.debug("Aucun itinéraire dans la réponse Skyscanner")
            return []

        if not items:
            return []

        seen_ids = set()
        flights = []

        for item in items:
            if item["id"] in seen_ids:
                continue
            seen_ids.add(item["id"])
            flights.append(self._parse_flight(item))

        return flights

    def _parse_flight(self, item: dict) -> Flight:
        price = item["price"]
        return Flight(
            id=item["id"],
            legs=[self._parse_leg(leg) for leg in item.get("legs", [])],
            price=float(price["raw"]),
            price_formatted=price["formatted"],
        )

    def _parse_leg(self, leg: dict) -> FlightLeg:
        return FlightLeg(
            arrival=leg["arrival"],
            departure=leg["departure"],
            origin_code=leg["origin"]["id"],
            origin_name=leg["origin"]["name"],
            destination_code=leg["destination"]["id"],
            destination_name=leg["destination"]["name"],
            duration_in_minutes=leg["durationInMinutes"],
            stop_count=leg["stopCount"],
            segments=[self._parse_segment(segment) for segment in leg.get("segments", [])],
        )

    def _parse_segment(self, segment: dict) -> FlightSegment:
        return FlightSegment(
            arrival=segment["arrival"],
            departure=segment["departure"],
            origin_code=segment["origin"]["displayCode"],
            origin_name=segment["origin"]["name"],
            destination_code=segment["destination"]["displayCode"],
            destination_name=segment["destination"]["name"],
            carrier=segment["operatingCarrier"]["name"],
            flight_number=segment["flightNumber"],
        )
