"""テスト共通のフィクスチャ"""

import pytest
from fakes import FakePoiProvider, FakeReverseGeocoder

from restaurant_finder.features.finder.services.finder_service import FinderService
from restaurant_finder.features.geocoding.services.geocoding_service import GeocodingService
from restaurant_finder.features.places.services.restaurant_service import RestaurantService


@pytest.fixture
def geocoder() -> FakeReverseGeocoder:
    return FakeReverseGeocoder(
        {"city": "Springfield", "country": "USA", "country_code": "us"}
    )


@pytest.fixture
def poi_provider() -> FakePoiProvider:
    return FakePoiProvider()


@pytest.fixture
def finder_service(geocoder: FakeReverseGeocoder, poi_provider: FakePoiProvider) -> FinderService:
    return FinderService(
        geocoding_service=GeocodingService(geocoder),
        restaurant_service=RestaurantService(poi_provider),
    )
