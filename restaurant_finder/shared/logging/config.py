"""ロギング設定"""
import logging
import sys

# ロガー設定済みフラグ
_logger_configured = False

# uvicornが独自にハンドラーを付けるロガー
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def setup_logging(level: str = "INFO", access_log: bool = True) -> None:
    """
    ロギングを設定

    uvicornのログもルートロガーに流し、同じフォーマットで出力する

    Args:
        level: ログレベル (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        access_log: uvicornのアクセスログ（1リクエスト1行）を出力するか
    """
    global _logger_configured

    if _logger_configured:
        return

    # ログレベルの設定
    log_level = getattr(logging, level.upper(), logging.INFO)

    # ルートロガーの設定
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # 既存のハンドラーをクリア
    root_logger.handlers.clear()

    # フォーマッターの設定
    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # コンソールハンドラーの追加
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # uvicornのハンドラーを外してルートロガーに伝播させる
    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True

    if not access_log:
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    # 上流API呼び出しのコネクションログは抑制
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    _logger_configured = True
    logging.info(f"Logging configured with level: {level}, access_log={access_log}")


def get_logger(name: str) -> logging.Logger:
    """
    指定名のロガーを取得

    Args:
        name: ロガー名（通常は__name__を指定）

    Returns:
        ロガーインスタンス
    """
    return logging.getLogger(name)
