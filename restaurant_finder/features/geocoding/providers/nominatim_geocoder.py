"""Nominatim（OpenStreetMap）逆ジオコーディング実装"""
from typing import Any, Optional

from ....shared.exceptions.errors import GeocodingError, HTTPError
from ....shared.http.client import HTTPClient
from ....shared.logging.config import get_logger
from .base import ReverseGeocoder

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://nominatim.openstreetmap.org"


class NominatimReverseGeocoder(ReverseGeocoder):
    """Nominatim Reverse API実装"""

    def __init__(
        self,
        http_client: Optional[HTTPClient] = None,
        base_url: str = DEFAULT_BASE_URL,
        language: str = "en",
    ) -> None:
        """
        Args:
            http_client: HTTPクライアント（Noneの場合は新規作成）
            base_url: NominatimのベースURL
            language: 地名の言語（accept-language）
        """
        self.http_client = http_client or HTTPClient()
        self.reverse_url = f"{base_url.rstrip('/')}/reverse"
        self.language = language

        logger.info(f"NominatimReverseGeocoder initialized: {self.reverse_url}")

    def reverse(self, latitude: float, longitude: float) -> dict[str, Any]:
        params = {
            "lat": latitude,
            "lon": longitude,
            "format": "json",
            "accept-language": self.language,
        }

        try:
            payload = self.http_client.get_json(self.reverse_url, params=params)
        except HTTPError as e:
            raise GeocodingError(f"Nominatim request failed: {e}") from e

        if not isinstance(payload, dict):
            raise GeocodingError("Nominatim response is not a JSON object")

        address = payload.get("address")
        if not isinstance(address, dict):
            # 海上など住所が見つからない場合は {"error": "Unable to geocode"} が返る
            raise GeocodingError(
                f"Nominatim response has no address block: {payload.get('error', 'missing')}"
            )

        logger.debug(f"Reverse geocoded ({latitude}, {longitude}) -> {address.get('country')}")

        return address

    def close(self) -> None:
        self.http_client.close()
