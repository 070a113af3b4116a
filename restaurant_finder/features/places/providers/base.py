"""POIプロバイダーの抽象基底クラス"""

from abc import ABC, abstractmethod
from typing import Any

from ..domain.models import PoiQuery


class PoiProvider(ABC):
    """空間検索に対応したPOIプロバイダー"""

    @abstractmethod
    def search(self, query: PoiQuery) -> list[dict[str, Any]]:
        """
        条件に合うPOIを検索

        Args:
            query: 検索条件

        Returns:
            list[dict[str, Any]]: 生の候補（"lat", "lon", "tags" を持つ辞書）。最大 query.limit 件

        Raises:
            PlacesError: 上流の呼び出しに失敗した場合
        """
        pass

    def close(self) -> None:
        """保持しているリソースを解放"""
        pass
