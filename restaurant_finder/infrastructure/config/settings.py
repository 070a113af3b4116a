"""アプリケーション設定（Pydantic Settings）"""
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """アプリケーション設定"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Project
    environment: str = Field(
        default="development",
        description="環境 (development, staging, production)",
    )

    # Upstream providers
    nominatim_base_url: str = Field(
        default="https://nominatim.openstreetmap.org",
        description="逆ジオコーディング（Nominatim）のベースURL",
    )
    overpass_url: str = Field(
        default="https://overpass-api.de/api/interpreter",
        description="POI検索（Overpass API）のエンドポイント",
    )
    upstream_user_agent: str = Field(
        default="Mozilla/5.0 (compatible; RestaurantFinder/1.0)",
        description="上流APIに送るUser-Agent",
    )
    upstream_timeout: float = Field(
        default=10.0,
        gt=0,
        description="上流APIのタイムアウト（秒）",
    )
    upstream_max_retries: int = Field(
        default=0,
        ge=0,
        description="上流APIのリトライ回数（デフォルトはリトライなし）",
    )

    # Search
    search_radius_m: int = Field(
        default=5000,
        gt=0,
        le=5000,
        description="検索半径（メートル）。距離計算は近距離近似のため5km以下",
    )
    candidate_limit: int = Field(
        default=20,
        gt=0,
        description="上流から取得する候補の最大数",
    )
    result_limit: int = Field(
        default=3,
        gt=0,
        description="レスポンスに含めるレストランの最大数",
    )
    cuisine_pattern: str = Field(
        default="american|burger|steak",
        description="cuisineタグにマッチさせる正規表現（大文字小文字を区別しない）",
    )
    poi_categories: str = Field(
        default="restaurant,fast_food",
        description="対象のamenityカテゴリ（カンマ区切り）",
    )

    # Display
    display_timezone: Optional[str] = Field(
        default=None,
        description="日時表示のタイムゾーン（例: Europe/London）。未設定の場合はサーバーのローカル時間",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="ログレベル (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    access_log_enabled: bool = Field(
        default=True,
        description="uvicornのアクセスログを出力するか",
    )

    # Server
    port: int = Field(
        default=5003,
        description="HTTPサーバーのポート番号",
    )

    def get_poi_categories(self) -> list[str]:
        """対象カテゴリのリストを取得"""
        return [c.strip() for c in self.poi_categories.split(",") if c.strip()]

    @property
    def is_production(self) -> bool:
        """本番環境かどうか"""
        return self.environment.lower() == "production"
