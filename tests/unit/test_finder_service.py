"""検索集約サービスのテスト"""

import asyncio
import re
import threading
from typing import Any

import pytest
import pytz
from fakes import FakePoiProvider, FakeReverseGeocoder, make_element, north_of

from restaurant_finder.features.finder.services.finder_service import (
    FinderService,
    build_finder_service,
    parse_coordinate,
)
from restaurant_finder.features.geocoding.domain.models import Location
from restaurant_finder.features.geocoding.providers.nominatim_geocoder import (
    NominatimReverseGeocoder,
)
from restaurant_finder.features.geocoding.services.geocoding_service import GeocodingService
from restaurant_finder.features.places.domain.models import PoiQuery
from restaurant_finder.features.places.providers.overpass_provider import OverpassPoiProvider
from restaurant_finder.features.places.services.restaurant_service import RestaurantService
from restaurant_finder.infrastructure.config.settings import Settings
from restaurant_finder.shared.exceptions.errors import ConfigurationError, ValidationError
from restaurant_finder.shared.utils.geo import Coordinate

DATE_PATTERN = re.compile(r"^[A-Z][a-z]+day \d{1,2} [A-Z][a-z]+ \d{4}$")
TIME_PATTERN = re.compile(r"^\d{2}:\d{2}:\d{2}$")


@pytest.mark.parametrize(
    "raw_lat,raw_lon,expected",
    [
        ("39.0", "-89.6", Coordinate(39.0, -89.6)),
        (" 12.3 ", "45", Coordinate(12.3, 45.0)),
        ("-90", "180", Coordinate(-90.0, 180.0)),
    ],
)
def test_parse_coordinate(raw_lat: str, raw_lon: str, expected: Coordinate) -> None:
    assert parse_coordinate(raw_lat, raw_lon) == expected


@pytest.mark.parametrize(
    "raw_lat,raw_lon",
    [
        ("not-a-number", "12.3"),
        ("12.3", "abc"),
        (None, "12.3"),
        ("12.3", None),
        ("", ""),
        ("nan", "1"),
        ("1", "inf"),
        ("91", "0"),
        ("0", "-180.01"),
    ],
)
def test_parse_coordinate_rejects_invalid_input(raw_lat: str, raw_lon: str) -> None:
    with pytest.raises(ValidationError, match="Invalid coordinates"):
        parse_coordinate(raw_lat, raw_lon)


def test_invalid_input_makes_no_upstream_call(
    finder_service: FinderService, geocoder: FakeReverseGeocoder, poi_provider: FakePoiProvider
) -> None:
    """入力が不正な場合は上流を呼び出さない"""
    with pytest.raises(ValidationError):
        asyncio.run(finder_service.handle_find("not-a-number", "12.3"))

    assert geocoder.calls == []
    assert poi_provider.queries == []


def test_handle_find_combines_location_and_restaurants(
    finder_service: FinderService, poi_provider: FakePoiProvider
) -> None:
    poi_provider.elements = [
        make_element("Liberty Grill", north_of(39.0, 1200), -89.6),
        make_element("Burger Barn", north_of(39.0, 300), -89.6),
    ]

    result = asyncio.run(finder_service.handle_find("39.0", "-89.6"))

    assert result.location == Location("Springfield", "USA", "us")
    assert [r.name for r in result.restaurants] == ["Burger Barn", "Liberty Grill"]
    assert DATE_PATTERN.match(result.date)
    assert TIME_PATTERN.match(result.time)
    assert result.unavailable_sources == ()
    assert not result.is_degraded


def test_both_providers_down_still_returns_result() -> None:
    """上流が両方とも失敗してもフォールバック値で結果を返す"""
    service = FinderService(
        geocoding_service=GeocodingService(FakeReverseGeocoder(fail=True)),
        restaurant_service=RestaurantService(FakePoiProvider(fail=True)),
    )

    result = asyncio.run(service.handle_find("39.0", "-89.6"))

    assert result.location == Location.unknown()
    assert result.restaurants == ()
    assert result.unavailable_sources == ("geocoding", "places")
    assert result.is_degraded


def test_one_provider_down_is_reported() -> None:
    service = FinderService(
        geocoding_service=GeocodingService(FakeReverseGeocoder({"town": "Chatham"})),
        restaurant_service=RestaurantService(FakePoiProvider(fail=True)),
    )

    result = asyncio.run(service.handle_find("39.7", "-89.7"))

    assert result.location.city == "Chatham"
    assert result.unavailable_sources == ("places",)


def test_date_uses_display_timezone(
    geocoder: FakeReverseGeocoder, poi_provider: FakePoiProvider
) -> None:
    service = FinderService(
        geocoding_service=GeocodingService(geocoder),
        restaurant_service=RestaurantService(poi_provider),
        display_timezone=pytz.timezone("Pacific/Kiritimati"),
    )

    result = asyncio.run(service.handle_find("1.87", "-157.4"))

    assert DATE_PATTERN.match(result.date)
    assert TIME_PATTERN.match(result.time)


def test_response_dict_shape(finder_service: FinderService) -> None:
    result = asyncio.run(finder_service.handle_find("39.0", "-89.6"))

    body = result.to_response_dict()

    assert set(body) == {"date", "time", "location", "restaurants"}
    assert body["location"] == {"city": "Springfield", "country": "USA", "countryCode": "us"}
    assert body["restaurants"] == []


def test_close_releases_providers(
    finder_service: FinderService, geocoder: FakeReverseGeocoder, poi_provider: FakePoiProvider
) -> None:
    finder_service.close()

    assert geocoder.closed
    assert poi_provider.closed


def test_build_finder_service_from_settings() -> None:
    settings = Settings(
        _env_file=None,
        overpass_url="https://overpass.example/api",
        nominatim_base_url="https://nominatim.example",
        upstream_timeout=4,
        search_radius_m=2000,
        poi_categories="restaurant",
        display_timezone="Europe/London",
    )

    service = build_finder_service(settings)

    try:
        geocoder = service.geocoding_service.geocoder
        provider = service.restaurant_service.provider
        assert isinstance(geocoder, NominatimReverseGeocoder)
        assert geocoder.reverse_url == "https://nominatim.example/reverse"
        assert isinstance(provider, OverpassPoiProvider)
        assert provider.interpreter_url == "https://overpass.example/api"
        assert provider.http_client.timeout == 4
        assert service.restaurant_service.radius_m == 2000
        assert service.restaurant_service.categories == ("restaurant",)
        assert service.display_timezone == pytz.timezone("Europe/London")
    finally:
        service.close()


def test_build_finder_service_rejects_unknown_timezone() -> None:
    settings = Settings(_env_file=None, display_timezone="Nowhere/Special")

    with pytest.raises(ConfigurationError):
        build_finder_service(settings)


class BarrierReverseGeocoder(FakeReverseGeocoder):
    """もう一方の呼び出しが始まるまで待つ逆ジオコーダー"""

    def __init__(self, barrier: threading.Barrier) -> None:
        super().__init__({"city": "Springfield", "country": "USA", "country_code": "us"})
        self.barrier = barrier

    def reverse(self, latitude: float, longitude: float) -> dict[str, Any]:
        self.barrier.wait()
        return super().reverse(latitude, longitude)


class BarrierPoiProvider(FakePoiProvider):
    """もう一方の呼び出しが始まるまで待つPOIプロバイダー"""

    def __init__(self, barrier: threading.Barrier) -> None:
        super().__init__([make_element("Burger Barn", north_of(39.0, 300), -89.6)])
        self.barrier = barrier

    def search(self, query: PoiQuery) -> list[dict[str, Any]]:
        self.barrier.wait()
        return super().search(query)


def test_lookups_run_concurrently() -> None:
    """逆ジオコーディングとPOI検索は同時に実行される（順番に呼ぶとバリアがタイムアウトする）"""
    barrier = threading.Barrier(2, timeout=5)
    service = FinderService(
        geocoding_service=GeocodingService(BarrierReverseGeocoder(barrier)),
        restaurant_service=RestaurantService(BarrierPoiProvider(barrier)),
    )

    result = asyncio.run(service.handle_find("39.0", "-89.6"))

    assert result.location.city == "Springfield"
    assert [r.name for r in result.restaurants] == ["Burger Barn"]
    assert not barrier.broken
