"""Modèles de données pour la recherche de vols."""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from flightsearch.errors import (
    DiscountAlreadyAppliedError,
    DiscountError,
    DiscountRateExceededError,
)

MAX_DISCOUNT_RATE = 0.10


def format_price(amount: float) -> str:
    """Prix affiché, arrondi à l'unité supérieure (ex: 72.3 -> "$73")."""
    # Arrondi préalable pour que 90.00000000000001 reste "$90"
    return f"${math.ceil(round(amount, 6))}"


@dataclass(frozen=True)
class FlightQuery:
    """Paramètres d'une recherche aller-retour, tels que reçus de l'appelant."""

    departure_date: str  # yyyy-MM-dd
    return_date: str  # yyyy-MM-dd
    origin: str
    origin_id: str
    destination: str
    destination_id: str

    def to_params(self) -> Dict[str, str]:
        """Paramètres bruts transmis au provider."""
        return {
            "departureDate": self.departure_date,
            "returnDate": self.return_date,
            "origin": self.origin,
            "originId": self.origin_id,
            "destination": self.destination,
            "destinationId": self.destination_id,
        }


@dataclass
class FlightSegment:
    """Un vol sans escale à l'intérieur d'un trajet."""

    arrival: str
    departure: str
    origin_code: str
    origin_name: str
    destination_code: str
    destination_name: str
    carrier: str
    flight_number: str

    def to_dict(self) -> dict:
        return {
            "arrival": self.arrival,
            "departure": self.departure,
            "originCode": self.origin_code,
            "originName": self.origin_name,
            "destinationCode": self.destination_code,
            "destinationName": self.destination_name,
            "carrier": self.carrier,
            "flightNumber": self.flight_number,
        }


@dataclass
class FlightLeg:
    """Un trajet (aller ou retour), éventuellement avec escales."""

    arrival: str
    departure: str
    origin_code: str
    origin_name: str
    destination_code: str
    destination_name: str
    duration_in_minutes: int
    stop_count: int
    segments: List[FlightSegment] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "arrival": self.arrival,
            "departure": self.departure,
            "originCode": self.origin_code,
            "originName": self.origin_name,
            "destinationCode": self.destination_code,
            "destinationName": self.destination_name,
            "durationInMinutes": self.duration_in_minutes,
            "stopCount": self.stop_count,
            "segments": [segment.to_dict() for segment in self.segments],
        }


@dataclass
class Flight:
    """Représente un itinéraire aller-retour avec son prix."""

    id: str
    legs: List[FlightLeg]
    price: float
    price_formatted: str
    # Toujours initialisés depuis le prix de base, modifiés par apply_discount
    price_after_discount: float = field(init=False)
    price_after_discount_formatted: str = field(init=False)
    discount_rate: Optional[float] = field(default=None, init=False)

    def __post_init__(self):
        self.price_after_discount = self.price
        self.price_after_discount_formatted = self.price_formatted

    def apply_discount(self, discount_rate: float) -> None:
        """
        Applique une remise au prix de base.

        Args:
            discount_rate: Taux de remise (0.10 = 10%)

        Raises:
            DiscountRateExceededError: Si le taux dépasse MAX_DISCOUNT_RATE
            DiscountError: Si le taux est négatif ou n'est pas un nombre (NaN)
            DiscountAlreadyAppliedError: Si une remise a déjà été appliquée
        """
        if discount_rate > MAX_DISCOUNT_RATE:
            raise DiscountRateExceededError("Discount rate cannot be greater than 10%")

        # Exclut aussi NaN, pour lequel toute comparaison est fausse
        if not 0 <= discount_rate <= MAX_DISCOUNT_RATE:
            raise DiscountError(f"Invalid discount rate: {discount_rate!r}")

        if self.discount_rate is not None:
            raise DiscountAlreadyAppliedError(f"Discount already applied to flight {self.id}")

        price_after_discount = self.price * (1 - discount_rate)
        price_after_discount_formatted = format_price(price_after_discount)

        self.discount_rate = discount_rate
        self.price_after_discount = price_after_discount
        self.price_after_discount_formatted = price_after_discount_formatted

    def to_dict(self) -> dict:
        """Représentation JSON (clés camelCase) renvoyée à l'appelant."""
        return {
            "id": self.id,
            "price": self.price,
            "priceFormatted": self.price_formatted,
            "priceAfterDiscount": self.price_after_discount,
            "priceAfterDiscountFormatted": self.price_after_discount_formatted,
            "legs": [leg.to_dict() for leg in self.legs],
        }
