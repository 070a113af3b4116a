"""カスタム例外定義"""


class FinderError(Exception):
    """レストラン検索サービスの基底例外"""

    pass


class HTTPError(FinderError):
    """HTTP関連のエラー"""

    pass


class GeocodingError(FinderError):
    """逆ジオコーディングプロバイダーのエラー"""

    pass


class PlacesError(FinderError):
    """POIプロバイダーのエラー"""

    pass


class ConfigurationError(FinderError):
    """設定エラー"""

    pass


class ValidationError(FinderError):
    """バリデーションエラー（クライアント入力の不備）"""

    pass
