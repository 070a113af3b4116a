"""テスト用のフェイクプロバイダー"""

from typing import Any, Optional

from restaurant_finder.features.geocoding.providers.base import ReverseGeocoder
from restaurant_finder.features.places.domain.models import PoiQuery
from restaurant_finder.features.places.providers.base import PoiProvider
from restaurant_finder.shared.exceptions.errors import GeocodingError, PlacesError
from restaurant_finder.shared.utils.geo import METERS_PER_DEGREE


class FakeReverseGeocoder(ReverseGeocoder):
    """固定の住所ブロックを返す逆ジオコーダー"""

    def __init__(self, address: Optional[dict[str, Any]] = None, fail: bool = False) -> None:
        self.address = address if address is not None else {}
        self.fail = fail
        self.calls: list[tuple[float, float]] = []
        self.closed = False

    def reverse(self, latitude: float, longitude: float) -> dict[str, Any]:
        self.calls.append((latitude, longitude))
        if self.fail:
            raise GeocodingError("connection refused")
        return self.address

    def close(self) -> None:
        self.closed = True


class FakePoiProvider(PoiProvider):
    """固定の候補を返すPOIプロバイダー"""

    def __init__(self, elements: Optional[list[dict[str, Any]]] = None, fail: bool = False) -> None:
        self.elements = elements if elements is not None else []
        self.fail = fail
        self.queries: list[PoiQuery] = []
        self.closed = False

    def search(self, query: PoiQuery) -> list[dict[str, Any]]:
        self.queries.append(query)
        if self.fail:
            raise PlacesError("overpass timed out")
        return list(self.elements)

    def close(self) -> None:
        self.closed = True


def make_element(
    name: Optional[str],
    lat: float,
    lon: float,
    tags: Optional[dict[str, str]] = None,
) -> dict[str, Any]:
    """Overpassのnode要素を作成"""
    element_tags = dict(tags or {})
    if name is not None:
        element_tags["name"] = name
    return {"type": "node", "lat": lat, "lon": lon, "tags": element_tags}


def north_of(latitude: float, meters: float) -> float:
    """指定距離だけ北の緯度"""
    return latitude + meters / METERS_PER_DEGREE
