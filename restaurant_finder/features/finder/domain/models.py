"""検索結果のドメインモデル"""
from dataclasses import dataclass
from typing import Any

from ...geocoding.domain.models import Location
from ...places.domain.models import Restaurant


@dataclass(frozen=True)
class FindResult:
    """1リクエスト分の検索結果（キャッシュ・永続化はしない）"""

    date: str  # 表示用の日付（例: "Monday 19 October 2026"）
    time: str  # 表示用の時刻（例: "14:05:09"）
    location: Location  # 地名（取得できなかった場合は番兵値）
    restaurants: tuple[Restaurant, ...] = ()  # 近い順、最大3件

    # 呼び出しに失敗した上流プロバイダー名（レスポンス本文には含めない）
    unavailable_sources: tuple[str, ...] = ()

    @property
    def is_degraded(self) -> bool:
        """フォールバック値を含むかどうか"""
        return bool(self.unavailable_sources)

    def to_response_dict(self) -> dict[str, Any]:
        """APIレスポンス用の辞書に変換"""
        return {
            "date": self.date,
            "time": self.time,
            "location": self.location.to_response_dict(),
            "restaurants": [r.to_response_dict() for r in self.restaurants],
        }
