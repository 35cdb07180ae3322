"""Exceptions levées par la recherche de vols."""


class FlightSearchError(Exception):
    """Erreur de base du package."""


class InvalidDateError(FlightSearchError, ValueError):
    """Une date ne respecte pas le format attendu ou n'existe pas."""


class InvalidQueryError(FlightSearchError, ValueError):
    """Les dates sont valides mais violent une règle métier (passé, ordre)."""


class UpstreamUnavailableError(FlightSearchError):
    """Le fournisseur de données de vol n'a pas pu répondre."""


class ProviderError(FlightSearchError):
    """Erreur levée par un provider (réseau, statut HTTP, réponse illisible)."""


class DiscountError(FlightSearchError):
    """Application de remise refusée."""


class DiscountRateExceededError(DiscountError):
    """Le taux de remise dépasse le maximum autorisé."""


class DiscountAlreadyAppliedError(DiscountError):
    """Une remise a déjà été appliquée à ce vol."""
