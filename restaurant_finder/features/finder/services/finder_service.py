"""座標から地名と近隣レストランをまとめて返すサービス"""

import asyncio
from typing import Optional

import pytz

from ....infrastructure.config.settings import Settings
from ....shared.exceptions.errors import ValidationError
from ....shared.http.client import HTTPClient
from ....shared.logging.config import get_logger
from ....shared.utils.datetime_utils import (
    format_display_date,
    format_display_time,
    now_in,
    resolve_timezone,
)
from ....shared.utils.geo import Coordinate
from ...geocoding.domain.models import Location
from ...geocoding.providers.nominatim_geocoder import NominatimReverseGeocoder
from ...geocoding.services.geocoding_service import GeocodingService
from ...places.providers.overpass_provider import OverpassPoiProvider
from ...places.services.restaurant_service import RestaurantService
from ..domain.models import FindResult

logger = get_logger(__name__)

INVALID_COORDINATES = "Invalid coordinates"

GEOCODING_SOURCE = "geocoding"
PLACES_SOURCE = "places"


def parse_coordinate(raw_lat: Optional[str], raw_lon: Optional[str]) -> Coordinate:
    """
    入力文字列を座標に変換

    Args:
        raw_lat: 緯度（クエリ文字列の値）
        raw_lon: 経度（クエリ文字列の値）

    Returns:
        Coordinate: 検証済みの座標

    Raises:
        ValidationError: 未指定、数値でない、NaN/無限大、範囲外の場合
    """
    try:
        latitude = float(raw_lat)
        longitude = float(raw_lon)
    except (TypeError, ValueError) as e:
        raise ValidationError(INVALID_COORDINATES) from e

    point = Coordinate(latitude=latitude, longitude=longitude)
    if not point.is_valid():
        raise ValidationError(INVALID_COORDINATES)

    return point


class FinderService:
    """
    検索の集約サービス

    逆ジオコーディングとレストラン検索は互いに独立しているため、
    ワーカースレッドで並行に実行し、両方の完了を待って結果をまとめる
    """

    def __init__(
        self,
        geocoding_service: GeocodingService,
        restaurant_service: RestaurantService,
        display_timezone: Optional[pytz.BaseTzInfo] = None,
    ) -> None:
        """
        Args:
            geocoding_service: 逆ジオコーディングサービス
            restaurant_service: レストラン検索サービス
            display_timezone: 日時表示のタイムゾーン（Noneの場合はローカル時間）
        """
        self.geocoding_service = geocoding_service
        self.restaurant_service = restaurant_service
        self.display_timezone = display_timezone

        logger.info("FinderService initialized")

    async def handle_find(self, raw_lat: Optional[str], raw_lon: Optional[str]) -> FindResult:
        """
        座標の地名と近隣レストランを取得

        Args:
            raw_lat: 緯度（未検証）
            raw_lon: 経度（未検証）

        Returns:
            FindResult: 検索結果。上流が失敗した場合もフォールバック値で埋める

        Raises:
            ValidationError: 座標が不正な場合（上流は呼び出さない）
        """
        point = parse_coordinate(raw_lat, raw_lon)

        location_result, restaurants_result = await asyncio.gather(
            asyncio.to_thread(self.geocoding_service.lookup, point),
            asyncio.to_thread(self.restaurant_service.lookup, point),
        )

        unavailable = []
        if not location_result.is_ok:
            unavailable.append(GEOCODING_SOURCE)
        if not restaurants_result.is_ok:
            unavailable.append(PLACES_SOURCE)

        if unavailable:
            logger.warning(
                f"Degraded response for {point.to_tuple()}: unavailable={unavailable}"
            )

        now = now_in(self.display_timezone)

        result = FindResult(
            date=format_display_date(now),
            time=format_display_time(now),
            location=location_result.value_or(Location.unknown()),
            restaurants=tuple(restaurants_result.value_or([])),
            unavailable_sources=tuple(unavailable),
        )

        logger.info(
            f"Find completed for {point.to_tuple()}: "
            f"city={result.location.city}, restaurants={len(result.restaurants)}"
        )

        return result

    def close(self) -> None:
        """プロバイダーのセッションをクローズ"""
        self.geocoding_service.geocoder.close()
        self.restaurant_service.provider.close()


def build_finder_service(settings: Settings) -> FinderService:
    """
    設定からサービス一式を組み立てる

    Args:
        settings: アプリケーション設定

    Returns:
        FinderService: 本番用のプロバイダーを注入したサービス
    """
    display_timezone = resolve_timezone(settings.display_timezone)

    def create_http_client() -> HTTPClient:
        # プロバイダーごとにセッションを分ける
        return HTTPClient(
            timeout=settings.upstream_timeout,
            max_retries=settings.upstream_max_retries,
            user_agent=settings.upstream_user_agent,
        )

    geocoder = NominatimReverseGeocoder(
        http_client=create_http_client(),
        base_url=settings.nominatim_base_url,
    )
    provider = OverpassPoiProvider(
        http_client=create_http_client(),
        interpreter_url=settings.overpass_url,
    )

    return FinderService(
        geocoding_service=GeocodingService(geocoder),
        restaurant_service=RestaurantService(
            provider,
            radius_m=settings.search_radius_m,
            categories=settings.get_poi_categories(),
            cuisine_pattern=settings.cuisine_pattern,
            candidate_limit=settings.candidate_limit,
            result_limit=settings.result_limit,
        ),
        display_timezone=display_timezone,
    )
