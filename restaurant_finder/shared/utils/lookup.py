"""上流プロバイダー呼び出しの結果型"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class LookupStatus(str, Enum):
    """上流呼び出しのステータス"""

    OK = "ok"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class LookupResult(Generic[T]):
    """
    上流呼び出しの結果

    「結果が0件」と「プロバイダーが使えない」を区別するための型。
    どちらをフォールバック値に寄せるかは呼び出し側が決める。
    """

    status: LookupStatus
    data: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: T) -> "LookupResult[T]":
        return cls(status=LookupStatus.OK, data=data)

    @classmethod
    def unavailable(cls, error: str) -> "LookupResult[T]":
        return cls(status=LookupStatus.UNAVAILABLE, error=error)

    @property
    def is_ok(self) -> bool:
        return self.status == LookupStatus.OK

    def value_or(self, fallback: T) -> T:
        """成功時はデータ、失敗時はフォールバック値を返す"""
        if self.is_ok and self.data is not None:
            return self.data
        return fallback
