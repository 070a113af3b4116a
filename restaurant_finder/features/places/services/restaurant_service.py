"""近隣レストラン検索サービス"""

from typing import Any, Iterable, Optional

from ....shared.exceptions.errors import PlacesError
from ....shared.logging.config import get_logger
from ....shared.utils.geo import Coordinate, distance_meters
from ....shared.utils.lookup import LookupResult
from ....shared.utils.text import normalize_text
from ..domain.models import ADDRESS_NOT_LISTED, DEFAULT_CUISINE, PoiQuery, Restaurant
from ..providers.base import PoiProvider

logger = get_logger(__name__)

DEFAULT_RADIUS_M = 5000
DEFAULT_CATEGORIES = ("restaurant", "fast_food")
DEFAULT_CUISINE_PATTERN = "american|burger|steak"
DEFAULT_CANDIDATE_LIMIT = 20
DEFAULT_RESULT_LIMIT = 3


class RestaurantService:
    """
    近隣レストラン検索サービス

    プロバイダーから候補を取得し、距離を計算して近い順に並べ、
    上位 result_limit 件だけを返す
    """

    def __init__(
        self,
        provider: PoiProvider,
        radius_m: int = DEFAULT_RADIUS_M,
        categories: Iterable[str] = DEFAULT_CATEGORIES,
        cuisine_pattern: str = DEFAULT_CUISINE_PATTERN,
        candidate_limit: int = DEFAULT_CANDIDATE_LIMIT,
        result_limit: int = DEFAULT_RESULT_LIMIT,
    ) -> None:
        """
        Args:
            provider: POIプロバイダー
            radius_m: デフォルトの検索半径（メートル）
            categories: デフォルトの対象カテゴリ
            cuisine_pattern: デフォルトのcuisine正規表現
            candidate_limit: プロバイダーから取得する候補の最大数
            result_limit: 返すレストランの最大数
        """
        self.provider = provider
        self.radius_m = radius_m
        self.categories = tuple(categories)
        self.cuisine_pattern = cuisine_pattern
        self.candidate_limit = candidate_limit
        self.result_limit = result_limit

        logger.info(
            f"RestaurantService initialized: radius={radius_m}m, "
            f"categories={self.categories}, cuisine=/{cuisine_pattern}/i"
        )

    def lookup(
        self,
        center: Coordinate,
        radius_m: Optional[int] = None,
        categories: Optional[Iterable[str]] = None,
        cuisine_pattern: Optional[str] = None,
    ) -> LookupResult[list[Restaurant]]:
        """
        近隣のレストランを検索

        Args:
            center: 検索中心
            radius_m: 検索半径（Noneの場合はデフォルト）
            categories: 対象カテゴリ（Noneの場合はデフォルト）
            cuisine_pattern: cuisine正規表現（Noneの場合はデフォルト）

        Returns:
            LookupResult[list[Restaurant]]: 近い順、最大 result_limit 件。
            プロバイダーが使えない場合はUNAVAILABLE（0件はOK）
        """
        query = PoiQuery(
            center=center,
            radius_m=radius_m if radius_m is not None else self.radius_m,
            categories=tuple(sorted(categories)) if categories is not None else self.categories,
            cuisine_pattern=cuisine_pattern or self.cuisine_pattern,
            limit=self.candidate_limit,
        )

        try:
            elements = self.provider.search(query)
        except PlacesError as e:
            logger.warning(f"POI search unavailable around {center.to_tuple()}: {e}")
            return LookupResult.unavailable(str(e))

        restaurants = rank_restaurants(
            center, elements[: self.candidate_limit], self.result_limit
        )

        logger.debug(
            f"Ranked {len(restaurants)} of {len(elements)} candidates around {center.to_tuple()}"
        )

        return LookupResult.ok(restaurants)

    def find_nearby(
        self,
        center: Coordinate,
        radius_m: Optional[int] = None,
        categories: Optional[Iterable[str]] = None,
        cuisine_pattern: Optional[str] = None,
    ) -> list[Restaurant]:
        """
        近隣のレストランを検索（失敗時は空リスト）

        Returns:
            list[Restaurant]: 近い順、最大 result_limit 件
        """
        return self.lookup(center, radius_m, categories, cuisine_pattern).value_or([])


def rank_restaurants(
    center: Coordinate, elements: list[dict[str, Any]], limit: int = DEFAULT_RESULT_LIMIT
) -> list[Restaurant]:
    """
    候補をレストランに変換し、近い順に並べて上位 limit 件を返す

    店名のない候補、座標のない候補は除外する
    """
    restaurants = []
    for element in elements:
        restaurant = to_restaurant(center, element)
        if restaurant is not None:
            restaurants.append(restaurant)

    restaurants.sort(key=lambda r: r.distance_m)

    return restaurants[:limit]


def to_restaurant(center: Coordinate, element: dict[str, Any]) -> Optional[Restaurant]:
    """
    Overpassのelementをレストランに変換

    Returns:
        Optional[Restaurant]: 店名または座標がない場合はNone
    """
    if not isinstance(element, dict):
        return None

    tags = element.get("tags")
    if not isinstance(tags, dict):
        return None

    name = normalize_text(tags.get("name"))
    if not name:
        return None

    point = _to_coordinate(element.get("lat"), element.get("lon"))
    if point is None:
        logger.debug(f"Skipping '{name}': element has no valid coordinates")
        return None

    return Restaurant(
        name=name,
        cuisine=normalize_text(tags.get("cuisine")) or DEFAULT_CUISINE,
        address=build_address(tags),
        distance_m=distance_meters(center, point),
        latitude=point.latitude,
        longitude=point.longitude,
        phone=normalize_text(tags.get("phone")),
        website=normalize_text(tags.get("website")),
        opening_hours=normalize_text(tags.get("opening_hours")),
    )


def build_address(tags: dict[str, Any]) -> str:
    """
    タグから住所を組み立てる

    addr:street があれば "番地 通り名"、なければ addr:full、どちらもなければ "Address not listed"
    """
    street = normalize_text(tags.get("addr:street"))
    if street:
        housenumber = normalize_text(tags.get("addr:housenumber")) or ""
        return f"{housenumber} {street}".strip()

    return normalize_text(tags.get("addr:full")) or ADDRESS_NOT_LISTED


def _to_coordinate(latitude: Any, longitude: Any) -> Optional[Coordinate]:
    """数値・有限・範囲内の座標のみ受け付ける（NaNや巨大な整数はNone）"""
    values = []
    for value in (latitude, longitude):
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            return None
        try:
            values.append(float(value))
        except OverflowError:
            return None

    point = Coordinate(latitude=values[0], longitude=values[1])
    return point if point.is_valid() else None
