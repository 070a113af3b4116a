"""逆ジオコーディングプロバイダーの抽象基底クラス"""

from abc import ABC, abstractmethod
from typing import Any


class ReverseGeocoder(ABC):
    """逆ジオコーディングプロバイダー"""

    @abstractmethod
    def reverse(self, latitude: float, longitude: float) -> dict[str, Any]:
        """
        座標の住所ブロックを取得

        Args:
            latitude: 緯度
            longitude: 経度

        Returns:
            dict[str, Any]: 住所ブロック（city, town, village, suburb, country, country_code は任意）

        Raises:
            GeocodingError: 上流の呼び出しに失敗した場合
        """
        pass

    def close(self) -> None:
        """保持しているリソースを解放"""
        pass
