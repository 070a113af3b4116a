"""逆ジオコーディングサービス"""

from ....shared.exceptions.errors import GeocodingError
from ....shared.logging.config import get_logger
from ....shared.utils.geo import Coordinate
from ....shared.utils.lookup import LookupResult
from ....shared.utils.text import first_present, normalize_text
from ..domain.models import UNKNOWN, Location
from ..providers.base import ReverseGeocoder

logger = get_logger(__name__)

# 市区町村名として採用するフィールド（優先順）
CITY_FIELDS = ("city", "town", "village", "suburb")


class GeocodingService:
    """座標から地名（市区町村・国）を求めるサービス"""

    def __init__(self, geocoder: ReverseGeocoder) -> None:
        """
        Args:
            geocoder: 逆ジオコーディングプロバイダー
        """
        self.geocoder = geocoder

        logger.info(f"GeocodingService initialized: provider={type(geocoder).__name__}")

    def lookup(self, point: Coordinate) -> LookupResult[Location]:
        """
        座標の地名を取得

        Args:
            point: 座標

        Returns:
            LookupResult[Location]: プロバイダーが使えない場合はUNAVAILABLE
        """
        try:
            address = self.geocoder.reverse(point.latitude, point.longitude)
        except GeocodingError as e:
            logger.warning(f"Reverse geocoding unavailable for {point.to_tuple()}: {e}")
            return LookupResult.unavailable(str(e))

        location = Location(
            city=first_present(address, CITY_FIELDS) or UNKNOWN,
            country=normalize_text(address.get("country")) or UNKNOWN,
            country_code=normalize_text(address.get("country_code")) or "",
        )

        return LookupResult.ok(location)

    def reverse_geocode(self, point: Coordinate) -> Location:
        """
        座標の地名を取得（失敗時は番兵値）

        Args:
            point: 座標

        Returns:
            Location: 取得できなかった場合は Location.unknown()
        """
        return self.lookup(point).value_or(Location.unknown())
