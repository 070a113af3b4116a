"""逆ジオコーディング機能のドメインモデル"""
from dataclasses import dataclass
from typing import Any

UNKNOWN = "Unknown"


@dataclass(frozen=True)
class Location:
    """座標から求めた地名"""

    city: str  # 市区町村名（city → town → village → suburb の順で採用）
    country: str  # 国名
    country_code: str = ""  # ISO 3166-1 alpha-2（小文字）

    @classmethod
    def unknown(cls) -> "Location":
        """上流から取得できなかった場合の番兵値"""
        return cls(city=UNKNOWN, country=UNKNOWN, country_code="")

    def to_response_dict(self) -> dict[str, Any]:
        """APIレスポンス用の辞書に変換"""
        return {
            "city": self.city,
            "country": self.country,
            "countryCode": self.country_code,
        }
