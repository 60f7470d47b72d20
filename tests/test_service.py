"""Tests for the aggregation pipeline."""

import logging
import threading

import pytest

from conftest import FakeTransport, geoapify_feature, opendata_record, overpass_element
from place_aggregator.backend.service import PlaceAggregatorService
from place_aggregator.config import Settings
from place_aggregator.exceptions import (
    CallerError,
    InvalidParameterError,
    MissingCoordinatesError,
    ServerError,
    UnsupportedCategoryError,
    UpstreamError,
)
from place_aggregator.models import Category, SourceTag

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class TestResolve:
    """Tests for query validation."""

    def test_defaults(self, service: PlaceAggregatorService) -> None:
        query = service.resolve("48.8566", "2.3522")
        assert query.origin.lat == 48.8566
        assert query.max_distance is None
        assert query.config.category is Category.RESTAURANT

    def test_category_is_lowercased(self, service: PlaceAggregatorService) -> None:
        assert service.resolve(1, 2, category="EVENT").config.category is Category.EVENT

    def test_zero_is_a_valid_coordinate(self, service: PlaceAggregatorService) -> None:
        query = service.resolve(0, "0")
        assert (query.origin.lat, query.origin.lng) == (0.0, 0.0)

    @pytest.mark.parametrize(("lat", "lng"), [(None, 2.35), (48.85, None), ("", "2.35"), ("  ", "")])
    def test_missing_coordinates(self, service: PlaceAggregatorService, lat, lng) -> None:
        with pytest.raises(MissingCoordinatesError, match="lat and lng are required"):
            service.resolve(lat, lng)

    @pytest.mark.parametrize(
        ("lat", "lng", "max_distance"),
        [("north", "2.35", None), ("48.85", "2.35", "far"), ("nan", "2.35", None)],
    )
    def test_invalid_numbers(self, service: PlaceAggregatorService, lat, lng, max_distance) -> None:
        with pytest.raises(InvalidParameterError):
            service.resolve(lat, lng, max_distance)


class TestFetchPlaces:
    """End-to-end tests of the pipeline against canned provider responses."""

    def test_merge_filter_and_dedup(
        self, service: PlaceAggregatorService, transport: FakeTransport
    ) -> None:
        places = service.fetch_places(48.8566, 2.3522, 1000, "restaurant")

        assert {request.source for request in transport.requests} == set(SourceTag)
        # "Far Away" is out of range, "Sans Position" has no location and
        # "Chez Geoapify" duplicates the Overpass node.
        assert [place.title for place in places] == ["Chez Overpass", "Cantine", "Le Zinc"]
        assert [place.source for place in places] == [
            SourceTag.OVERPASS,
            SourceTag.OPENDATA,
            SourceTag.GEOAPIFY,
        ]

    def test_duplicate_keeps_first_source_fields(self, service: PlaceAggregatorService) -> None:
        first = service.fetch_places(48.8566, 2.3522, 1000)[0]
        assert first.title == "Chez Overpass"
        assert first.description == "Cuisine: french"
        assert first.address == "12, Rue de Rivoli"

    def test_unbounded_distance(self, service: PlaceAggregatorService) -> None:
        titles = [place.title for place in service.fetch_places(48.8566, 2.3522)]
        assert "Far Away" in titles
        assert "Sans Position" not in titles

    def test_geoapify_category_inference(self, service: PlaceAggregatorService) -> None:
        zinc = service.fetch_places(48.8566, 2.3522, 1000, "bar")[-1]
        assert zinc.title == "Le Zinc"
        assert zinc.category == "Bar"

    def test_event_only_calls_catalog(self, settings: Settings, rng) -> None:
        transport = FakeTransport(
            {
                SourceTag.OPENDATA: {
                    "records": [
                        opendata_record("e1", 48.857, 2.352, titre="Expo", descriptif="Photos")
                    ]
                }
            }
        )
        service = PlaceAggregatorService(settings, transport=transport, rng=rng)
        (event,) = service.fetch_places(48.8566, 2.3522, 5000, "event")

        assert [request.source for request in transport.requests] == [SourceTag.OPENDATA]
        assert transport.requests[0].url.endswith("/que-faire-a-paris-/records")
        assert event.category == "Événement"
        assert event.title == "Expo"
        assert event.description == "Photos"
        assert event.max_participants == 100

    def test_order_follows_declaration_not_arrival(self, settings: Settings, rng) -> None:
        """Overpass answers last but its places still come first."""
        geoapify_done = threading.Event()

        class SlowOverpass(FakeTransport):
            def send(self, request):
                if request.source is SourceTag.OVERPASS:
                    geoapify_done.wait(timeout=5)
                elif request.source is SourceTag.GEOAPIFY:
                    result = super().send(request)
                    geoapify_done.set()
                    return result
                return super().send(request)

        transport = SlowOverpass(
            {
                SourceTag.OVERPASS: {"elements": [overpass_element(1, 48.80, 2.30, name="O")]},
                SourceTag.OPENDATA: {"records": [opendata_record("d", 48.81, 2.31, titre="D")]},
                SourceTag.GEOAPIFY: {"features": [geoapify_feature("g", 2.32, 48.82, name="G")]},
            }
        )
        service = PlaceAggregatorService(settings, transport=transport, rng=rng)
        assert [p.title for p in service.fetch_places(48.8, 2.3)] == ["O", "D", "G"]

    def test_ratings_in_range(self, service: PlaceAggregatorService) -> None:
        for place in service.fetch_places(48.8566, 2.3522):
            assert 3.0 <= place.rating <= 5.0
            assert 0 <= place.review_count < 300


class TestErrors:
    """Caller errors never reach a provider; upstream failures abort the request."""

    def test_missing_lat_never_calls_adapters(
        self, service: PlaceAggregatorService, transport: FakeTransport
    ) -> None:
        with pytest.raises(CallerError):
            service.fetch_places(None, 2.35)
        assert transport.requests == []

    def test_unknown_category_never_calls_adapters(
        self, service: PlaceAggregatorService, transport: FakeTransport
    ) -> None:
        with pytest.raises(UnsupportedCategoryError, match="museum"):
            service.fetch_places(48.85, 2.35, None, "museum")
        assert transport.requests == []

    def test_upstream_failure_aborts(
        self, settings: Settings, payloads, rng
    ) -> None:
        payloads[SourceTag.OPENDATA] = UpstreamError(SourceTag.OPENDATA, "503 Service Unavailable")
        service = PlaceAggregatorService(settings, transport=FakeTransport(payloads), rng=rng)

        with pytest.raises(ServerError) as excinfo:
            service.fetch_places(48.8566, 2.3522, 1000)
        assert excinfo.value.source is SourceTag.OPENDATA

    def test_unexpected_transport_exception_becomes_server_error(
        self, settings: Settings, payloads, rng
    ) -> None:
        payloads[SourceTag.GEOAPIFY] = RuntimeError("boom")
        service = PlaceAggregatorService(settings, transport=FakeTransport(payloads), rng=rng)

        with pytest.raises(ServerError) as excinfo:
            service.fetch_places(48.8566, 2.3522)
        assert isinstance(excinfo.value.__cause__, RuntimeError)

    def test_failure_does_not_wait_for_stragglers(self, settings: Settings, payloads, rng) -> None:
        release = threading.Event()

        class HangingGeoapify(FakeTransport):
            def send(self, request):
                if request.source is SourceTag.GEOAPIFY:
                    release.wait(timeout=5)
                return super().send(request)

        payloads[SourceTag.OVERPASS] = UpstreamError(SourceTag.OVERPASS, "timeout")
        service = PlaceAggregatorService(settings, transport=HangingGeoapify(payloads), rng=rng)
        try:
            with pytest.raises(UpstreamError):
                service.fetch_places(48.8566, 2.3522)
            assert not release.is_set()
        finally:
            release.set()


@pytest.mark.live
def test_live_fetch_restaurants_paris(settings: Settings) -> None:
    """Hit the real providers (needs network and a Geoapify key)."""
    service = PlaceAggregatorService(settings)
    places = service.fetch_places(48.8566, 2.3522, 5000, "restaurant")
    logger.info(f"Live fetch returned {len(places)} places.")
    assert all(place.location is not None for place in places)
