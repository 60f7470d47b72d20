"""Shared fixtures: settings, canned provider payloads and a fake transport."""

import random
import threading
from datetime import datetime, timezone
from typing import Any

import pytest

from place_aggregator.backend.service import PlaceAggregatorService
from place_aggregator.backend.transport import SourceRequest
from place_aggregator.config import Settings
from place_aggregator.models import SourceTag

FIXED_NOW = datetime(2026, 3, 14, 15, 30, tzinfo=timezone.utc)


class FakeTransport:
    """Returns canned bodies per source and records every request it receives."""

    def __init__(self, responses: dict[SourceTag, Any]) -> None:
        self.responses = responses
        self.requests: list[SourceRequest] = []
        self._lock = threading.Lock()

    def send(self, request: SourceRequest) -> Any:
        with self._lock:
            self.requests.append(request)
        response = self.responses[request.source]
        if isinstance(response, Exception):
            raise response
        return response


def overpass_element(
    node_id: int, lat: float, lon: float, **tags: str
) -> dict[str, Any]:
    return {"type": "node", "id": node_id, "lat": lat, "lon": lon, "tags": tags}


def opendata_record(
    record_id: str, lat: float | None = None, lon: float | None = None, **fields: Any
) -> dict[str, Any]:
    if lat is not None and lon is not None:
        fields["tt"] = {"lat": lat, "lon": lon}
    return {"record": {"id": record_id, "fields": fields}}


def geoapify_feature(
    place_id: str, lon: float, lat: float, **properties: Any
) -> dict[str, Any]:
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [lon, lat]},
        "properties": {"place_id": place_id, **properties},
    }


@pytest.fixture
def settings() -> Settings:
    """Fixture for settings that ignore the environment and any .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(42)


@pytest.fixture
def payloads() -> dict[SourceTag, Any]:
    """One canned response per provider, all around central Paris."""
    return {
        SourceTag.OVERPASS: {
            "elements": [
                overpass_element(
                    1,
                    48.8566,
                    2.3522,
                    name="Chez Overpass",
                    cuisine="french",
                    **{"addr:housenumber": "12", "addr:street": "Rue de Rivoli"},
                ),
                overpass_element(2, 48.90, 2.40, name="Far Away"),
            ]
        },
        SourceTag.OPENDATA: {
            "records": [
                opendata_record("od-1", 48.86, 2.35, nom_restaurant="Cantine", adresse="1 Rue X"),
                opendata_record("od-2", nom_restaurant="Sans Position"),
            ]
        },
        SourceTag.GEOAPIFY: {
            "features": [
                # Same spot as the Overpass node: dropped as a duplicate.
                geoapify_feature("g-1", 2.3522, 48.8566, name="Chez Geoapify"),
                geoapify_feature(
                    "g-2",
                    2.355,
                    48.857,
                    name="Le Zinc",
                    categories=["catering", "catering.bar"],
                ),
            ]
        },
    }


@pytest.fixture
def transport(payloads: dict[SourceTag, Any]) -> FakeTransport:
    return FakeTransport(payloads)


@pytest.fixture
def service(
    settings: Settings, transport: FakeTransport, rng: random.Random
) -> PlaceAggregatorService:
    """Fixture for a service wired to the fake transport."""
    return PlaceAggregatorService(settings, transport=transport, rng=rng, now=lambda: FIXED_NOW)
