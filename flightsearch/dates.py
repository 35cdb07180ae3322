"""Parsing et comparaison de dates calendaires.

Toutes les dates manipulées ici sont des ``datetime`` en UTC. Un format sans
heure (``%Y-%m-%d``) donne minuit UTC.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Optional

from flightsearch.errors import InvalidDateError

# Format des dates de recherche (yyyy-MM-dd)
SEARCH_DATE_FORMAT = "%Y-%m-%d"
# Horodatage des entités (yyyy-MM-dd'T'HH:mm:ss.SSS'Z'), %f limité aux millisecondes
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"

SECONDS_PER_DAY = 86400

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Instant courant en UTC."""
    return datetime.now(timezone.utc)


def _render(value: datetime, fmt: str) -> str:
    """Reformate une date parsée, avec %f en millisecondes sur 3 chiffres."""
    if "%f" in fmt:
        fmt = fmt.replace("%f", f"{value.microsecond // 1000:03d}")
    return value.strftime(fmt)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _is_valid_date(value: Any) -> bool:
    return isinstance(value, datetime)


class DateValidator:
    """Valide et compare des dates sous un format fixe."""

    def __init__(self, fmt: str = SEARCH_DATE_FORMAT, clock: Clock = utc_now):
        """
        Initialise le validateur.

        Args:
            fmt: Format strftime par défaut pour le parsing
            clock: Fonction retournant l'instant courant (UTC)
        """
        self.fmt = fmt
        self.clock = clock

    def parse_date(self, value: Any, fmt: Optional[str] = None) -> datetime:
        """
        Parse une date en refusant les formats approximatifs et les dates
        inexistantes (mois 13, 30 février...).

        Args:
            value: Texte à parser
            fmt: Format strftime (par défaut celui du validateur)

        Returns:
            La date en UTC

        Raises:
            InvalidDateError: Si le texte ne correspond pas au format
        """
        fmt = fmt or self.fmt

        if not isinstance(value, str):
            raise InvalidDateError("Invalid date")

        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError as e:
            raise InvalidDateError("Invalid date") from e

        # strptime accepte "2024-3-5" pour %m/%d : on exige la forme exacte
        if _render(parsed, fmt) != value:
            raise InvalidDateError("Invalid date")

        return parsed.replace(tzinfo=timezone.utc)

    def is_valid_format(self, value: Any, fmt: Optional[str] = None) -> bool:
        """Indique si ``value`` se parse sous ``fmt`` (ne lève jamais)."""
        try:
            self.parse_date(value, fmt)
            return True
        except InvalidDateError:
            return False

    def is_past_date(self, date: datetime) -> bool:
        """
        Indique si la date est strictement antérieure à l'instant courant.

        Raises:
            InvalidDateError: Si ``date`` n'est pas une date parsée
        """
        if not _is_valid_date(date):
            raise InvalidDateError("Invalid date")

        return _as_utc(date) < _as_utc(self.clock())

    def is_on_or_before_date(self, target: datetime, reference: datetime) -> bool:
        """
        Indique si ``target`` est antérieure ou égale à ``reference``.

        Raises:
            InvalidDateError: Si l'une des deux dates est invalide
        """
        if not _is_valid_date(target):
            raise InvalidDateError("Invalid targetDate")

        if not _is_valid_date(reference):
            raise InvalidDateError("Invalid referenceDate")

        return _as_utc(target) <= _as_utc(reference)

    is_before_date = is_on_or_before_date

    def days_between(self, first: datetime, second: datetime) -> float:
        """
        Nombre de jours (fractionnaire) entre deux dates, quel que soit leur ordre.

        Raises:
            InvalidDateError: Si l'une des deux dates est invalide
        """
        if not _is_valid_date(first):
            raise InvalidDateError("Invalid firstDate")

        if not _is_valid_date(second):
            raise InvalidDateError("Invalid secondDate")

        start, end = _as_utc(first), _as_utc(second)
        if start > end:
            start, end = end, start

        return (end - start).total_seconds() / SECONDS_PER_DAY


_default_validator = DateValidator()


def parse_date(value: Any, fmt: str = SEARCH_DATE_FORMAT) -> datetime:
    return _default_validator.parse_date(value, fmt)


def is_valid_format(value: Any, fmt: str = SEARCH_DATE_FORMAT) -> bool:
    return _default_validator.is_valid_format(value, fmt)


def days_between(first: datetime, second: datetime) -> float:
    return _default_validator.days_between(first, second)
