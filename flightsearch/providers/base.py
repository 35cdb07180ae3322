"""Interface de base pour les providers de vols."""

from typing import List, Protocol
from flightsearch.models import Flight, FlightQuery


class FlightProvider(Protocol):
    """Interface pour les providers de vols."""

    async def search_flights(self, query: FlightQuery) -> List[Flight]:
        """
        Recherche des vols aller-retour.

        Args:
            query: Paramètres de recherche, dates au format yyyy-MM-dd non parsées

        Returns:
            Liste de vols trouvés, prix non remisés

        Raises:
            Exception: Toute erreur du fournisseur, traitée par l'appelant
        """
        ...
