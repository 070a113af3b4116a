"""POI検索機能のドメインモデル"""
from dataclasses import dataclass
from typing import Any, Optional

from ....shared.utils.geo import Coordinate, format_distance_km

ADDRESS_NOT_LISTED = "Address not listed"
DEFAULT_CUISINE = "American"


@dataclass(frozen=True)
class PoiQuery:
    """POIプロバイダーへの検索条件"""

    center: Coordinate  # 検索中心
    radius_m: int  # 検索半径（メートル）
    categories: tuple[str, ...]  # amenityカテゴリ（例: restaurant, fast_food）
    cuisine_pattern: str  # cuisineタグの正規表現（大文字小文字を区別しない）
    limit: int = 20  # 取得する候補の最大数


@dataclass(frozen=True)
class Restaurant:
    """近隣のレストラン"""

    name: str  # 店名
    cuisine: str  # 料理ジャンル
    address: str  # 住所（不明の場合は "Address not listed"）
    distance_m: float  # 検索中心からの距離（メートル）
    latitude: float  # 緯度
    longitude: float  # 経度

    # 上流に値がある場合のみ設定
    phone: Optional[str] = None  # 電話番号
    website: Optional[str] = None  # ウェブサイト
    opening_hours: Optional[str] = None  # 営業時間（OSM opening_hours 形式）

    @property
    def distance_km(self) -> float:
        """小数点以下1桁に丸めた距離（キロメートル）"""
        return round(self.distance_m / 1000, 1)

    def to_response_dict(self) -> dict[str, Any]:
        """APIレスポンス用の辞書に変換"""
        return {
            "name": self.name,
            "cuisine": self.cuisine,
            "address": self.address,
            "distance": format_distance_km(self.distance_m),
            "lat": self.latitude,
            "lon": self.longitude,
            "phone": self.phone,
            "website": self.website,
            "opening_hours": self.opening_hours,
        }
