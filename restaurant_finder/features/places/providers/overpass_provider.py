"""Overpass API（OpenStreetMap）によるPOI検索実装"""
from typing import Any, Optional

from ....shared.exceptions.errors import HTTPError, PlacesError
from ....shared.http.client import HTTPClient
from ....shared.logging.config import get_logger
from ..domain.models import PoiQuery
from .base import PoiProvider

logger = get_logger(__name__)

DEFAULT_INTERPRETER_URL = "https://overpass-api.de/api/interpreter"


def build_overpass_query(query: PoiQuery, server_timeout: int = 10) -> str:
    """
    検索条件からOverpass QLを組み立てる

    Args:
        query: 検索条件
        server_timeout: Overpassサーバー側のタイムアウト（秒）

    Returns:
        str: Overpass QL
    """
    lat, lon = query.center.to_tuple()
    pattern = query.cuisine_pattern.replace("\\", "\\\\").replace('"', '\\"')

    lines = [f"[out:json][timeout:{server_timeout}];", "("]
    for category in query.categories:
        lines.append(
            f'  node["amenity"="{category}"]["cuisine"~"{pattern}",i]'
            f"(around:{query.radius_m},{lat},{lon});"
        )
    lines.append(");")
    lines.append(f"out body {query.limit};")

    return "\n".join(lines)


class OverpassPoiProvider(PoiProvider):
    """Overpass API実装"""

    def __init__(
        self,
        http_client: Optional[HTTPClient] = None,
        interpreter_url: str = DEFAULT_INTERPRETER_URL,
    ) -> None:
        """
        Args:
            http_client: HTTPクライアント（Noneの場合は新規作成）
            interpreter_url: Overpass interpreterのURL
        """
        self.http_client = http_client or HTTPClient()
        self.interpreter_url = interpreter_url

        logger.info(f"OverpassPoiProvider initialized: {self.interpreter_url}")

    def search(self, query: PoiQuery) -> list[dict[str, Any]]:
        # サーバー側のタイムアウトはクライアントのタイムアウトに揃える
        server_timeout = max(1, int(self.http_client.timeout))
        overpass_query = build_overpass_query(query, server_timeout=server_timeout)

        try:
            payload = self.http_client.post_json(
                self.interpreter_url, data={"data": overpass_query}
            )
        except HTTPError as e:
            raise PlacesError(f"Overpass request failed: {e}") from e

        if not isinstance(payload, dict) or not isinstance(payload.get("elements"), list):
            raise PlacesError("Overpass response has no elements list")

        elements = payload["elements"]
        logger.debug(f"Overpass returned {len(elements)} elements around {query.center.to_tuple()}")

        return elements[: query.limit]

    def close(self) -> None:
        self.http_client.close()
