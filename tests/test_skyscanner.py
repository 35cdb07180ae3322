"""Tests pour le provider Skyscanner."""

import aiohttp
import pytest
from flightsearch.config import RapidAPIConfig
from flightsearch.errors import ProviderError
from flightsearch.models import FlightQuery
from flightsearch.providers.skyscanner import SkyscannerFlightProvider


def make_item(item_id, raw_price):
    return {
        "id": item_id,
        "price": {"raw": raw_price, "formatted": f"${raw_price}"},
        "legs": [
            {
                "arrival": "2025-05-01T11:00:00",
                "departure": "2025-05-01T10:00:00",
                "origin": {"id": "KUL", "name": "Kuala Lumpur International"},
                "destination": {"id": "SIN", "name": "Singapore Changi"},
                "durationInMinutes": 60,
                "stopCount": 0,
                "segments": [
                    {
                        "arrival": "2025-05-01T11:00:00",
                        "departure": "2025-05-01T10:00:00",
                        "origin": {"displayCode": "KUL", "name": "Kuala Lumpur International"},
                        "destination": {"displayCode": "SIN", "name": "Singapore Changi"},
                        "operatingCarrier": {"name": "Malaysia Airlines"},
                        "flightNumber": "603",
                    }
                ],
            }
        ],
    }


def make_response(*items):
    return {"data": {"itineraries": {"buckets": [{"id": "Best", "name": "Best", "items": list(items)}]}}}


class FakeResponse:
    def __init__(self, status, payload=None, text=""):
        self.status = status
        self._payload = payload
        self._text = text

    async def json(self):
        return self._payload

    async def text(self):
        return self._text

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """Remplace aiohttp.ClientSession et enregistre les appels."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []
        self.closed = False

    def get(self, url, headers=None, params=None):
        self.calls.append({"url": url, "headers": headers, "params": params})
        if self.error is not None:
            raise self.error
        return self.response

    async def close(self):
        self.closed = True


@pytest.fixture
def config():
    """Crée une configuration de test."""
    return RapidAPIConfig(api_key="test-key")


@pytest.fixture
def query():
    return FlightQuery(
        departure_date="2025-05-01",
        return_date="2025-05-20",
        origin="KUL",
        origin_id="1",
        destination="SIN",
        destination_id="2",
    )


def test_missing_api_key_is_rejected():
    with pytest.raises(ValueError):
        SkyscannerFlightProvider(RapidAPIConfig(api_key=""))


@pytest.mark.asyncio
async def test_search_sends_raw_query(config, query):
    provider = SkyscannerFlightProvider(config)
    session = FakeSession(FakeResponse(200, make_response(make_item("a", 100))))
    provider._session = session

    flights = await provider.search_flights(query)

    assert len(flights) == 1
    call = session.calls[0]
    assert call["url"] == "https://skyscanner89.p.rapidapi.com/flights/roundtrip/list"
    assert call["headers"] == {"x-rapidapi-host": "skyscanner89.p.rapidapi.com", "X-RapidAPI-Key": "test-key"}
    assert call["params"] == {
        "inDate": "2025-05-01",
        "outDate": "2025-05-20",
        "origin": "KUL",
        "originId": "1",
        "destination": "SIN",
        "destinationId": "2",
    }


@pytest.mark.asyncio
async def test_search_maps_items_and_skips_duplicates(config, query):
    provider = SkyscannerFlightProvider(config)
    provider._session = FakeSession(FakeResponse(
        200, make_response(make_item("a", 100), make_item("b", 80), make_item("a", 55))
    ))

    flights = await provider.search_flights(query)

    assert [f.id for f in flights] == ["a", "b"]
    flight = flights[0]
    assert flight.price == 100.0
    assert flight.price_formatted == "$100"
    assert flight.price_after_discount == 100.0
    leg = flight.legs[0]
    assert leg.origin_code == "KUL"
    assert leg.destination_name == "Singapore Changi"
    assert leg.duration_in_minutes == 60
    segment = leg.segments[0]
    assert segment.carrier == "Malaysia Airlines"
    assert segment.flight_number == "603"
    assert segment.destination_code == "SIN"


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [
    {},
    {"data": {}},
    {"data": {"itineraries": {"buckets": []}}},
    {"data": {"itineraries": {"buckets": [{"items": []}]}}},
])
async def test_search_without_itineraries_returns_empty_list(config, query, payload):
    provider = SkyscannerFlightProvider(config)
    provider._session = FakeSession(FakeResponse(200, payload))

    assert await provider.search_flights(query) == []


@pytest.mark.asyncio
async def test_non_200_raises_provider_error(config, query):
    provider = SkyscannerFlightProvider(config)
    provider._session = FakeSession(FakeResponse(429, text="Too many requests"))

    with pytest.raises(ProviderError, match="429"):
        await provider.search_flights(query)


@pytest.mark.asyncio
async def test_network_error_raises_provider_error(config, query):
    provider = SkyscannerFlightProvider(config)
    provider._session = FakeSession(error=aiohttp.ClientConnectionError("connection refused"))

    with pytest.raises(ProviderError) as exc_info:
        await provider.search_flights(query)

    assert isinstance(exc_info.value.__cause__, aiohttp.ClientConnectionError)


@pytest.mark.asyncio
async def test_malformed_item_raises_provider_error(config, query):
    provider = SkyscannerFlightProvider(config)
    provider._session = FakeSession(FakeResponse(200, make_response({"id": "a"})))

    with pytest.raises(ProviderError):
        await provider.search_flights(query)


@pytest.mark.asyncio
async def test_close_closes_session(config):
    provider = SkyscannerFlightProvider(config)
    session = FakeSession()
    provider._session = session

    await provider.close()

    assert session.closed


class InvalidJSONResponse(FakeResponse):
    async def json(self):
        raise ValueError("Expecting value: line 1 column 1 (char 0)")


@pytest.mark.asyncio
async def test_non_json_body_raises_provider_error(config, query):
    provider = SkyscannerFlightProvider(config)
    provider._session = FakeSession(InvalidJSONResponse(200, text="<html>oops</html>"))

    with pytest.raises(ProviderError) as exc_info:
        await provider.search_flights(query)

    assert isinstance(exc_info.value.__cause__, ValueError)
