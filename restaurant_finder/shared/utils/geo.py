"""
座標と距離計算

検索半径（最大5km）内の近距離でのみ使う簡易計算。
長距離の距離表示には使用しないこと。
"""

import math
from dataclasses import dataclass

# 緯度1度あたりのメートル数（近似値）
METERS_PER_DEGREE = 111_320


@dataclass(frozen=True)
class Coordinate:
    """緯度・経度のペア（十進法の度）"""

    latitude: float  # 緯度 [-90, 90]
    longitude: float  # 経度 [-180, 180]

    def is_valid(self) -> bool:
        """有限値かつ範囲内かどうか"""
        return (
            math.isfinite(self.latitude)
            and math.isfinite(self.longitude)
            and -90.0 <= self.latitude <= 90.0
            and -180.0 <= self.longitude <= 180.0
        )

    def to_tuple(self) -> tuple[float, float]:
        """(緯度, 経度)のタプルとして返す"""
        return (self.latitude, self.longitude)


def distance_meters(a: Coordinate, b: Coordinate) -> float:
    """
    2点間の距離を正距円筒図法の平面近似で計算

    経度差は2点の平均緯度のcosでスケールする（a, bを入れ替えても同じ値になる）。

    Args:
        a: 1点目
        b: 2点目

    Returns:
        float: 距離（メートル）。NaNを含む入力の場合はNaN
    """
    mean_latitude = math.radians((a.latitude + b.latitude) / 2)
    dy = (b.latitude - a.latitude) * METERS_PER_DEGREE
    dx = (b.longitude - a.longitude) * METERS_PER_DEGREE * math.cos(mean_latitude)
    return math.hypot(dx, dy)


def format_distance_km(meters: float) -> str:
    """メートルを小数点以下1桁のキロメートル文字列に変換（例: "1.2"）"""
    return f"{meters / 1000:.1f}"
