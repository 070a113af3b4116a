"""日時関連ユーティリティ"""

from datetime import datetime
from typing import Optional

import pytz

from ..exceptions.errors import ConfigurationError

# 表示用の曜日・月名（ロケールに依存しないよう固定）
WEEKDAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def resolve_timezone(name: Optional[str]) -> Optional[pytz.BaseTzInfo]:
    """
    タイムゾーン名を解決

    Args:
        name: IANAタイムゾーン名（例: "Europe/London"）。Noneの場合はサーバーのローカル時間

    Returns:
        タイムゾーン（ローカル時間を使う場合はNone）

    Raises:
        ConfigurationError: 不明なタイムゾーン名の場合
    """
    if not name:
        return None

    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError as e:
        raise ConfigurationError(f"Unknown display timezone: {name}") from e


def now_in(tz: Optional[pytz.BaseTzInfo] = None) -> datetime:
    """指定タイムゾーン（Noneの場合はローカル時間）の現在時刻を取得"""
    if tz is None:
        return datetime.now().astimezone()
    return datetime.now(tz)


def format_display_date(dt: datetime) -> str:
    """
    表示用の日付文字列に変換

    Returns:
        "Monday 19 October 2026" のような文字列
    """
    return f"{WEEKDAYS[dt.weekday()]} {dt.day} {MONTHS[dt.month - 1]} {dt.year}"


def format_display_time(dt: datetime) -> str:
    """
    表示用の時刻文字列に変換（24時間表記、秒あり）

    Returns:
        "14:05:09" のような文字列
    """
    return f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"
