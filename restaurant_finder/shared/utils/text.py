"""テキスト処理ユーティリティ"""

import re
from typing import Any, Optional


def normalize_text(text: Optional[Any]) -> Optional[str]:
    """
    タグ値を正規化

    - 文字列以外はNoneとして扱う
    - 連続する空白を1つに
    - 前後の空白を除去
    - 空文字列はNone
    """
    if not isinstance(text, str):
        return None

    text = re.sub(r"\s+", " ", text).strip()

    return text if text else None


def first_present(values: dict[str, Any], keys: tuple[str, ...]) -> Optional[str]:
    """
    指定キーを順に見て、最初に値が入っているものを返す

    Args:
        values: 検索対象の辞書
        keys: 優先順のキー

    Returns:
        Optional[str]: 正規化済みの値（どれもなければNone）
    """
    for key in keys:
        value = normalize_text(values.get(key))
        if value:
            return value

    return None
