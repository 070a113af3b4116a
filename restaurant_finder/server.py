"""HTTPサーバー（FastAPI）"""
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse

from .features.finder.services.finder_service import FinderService, build_finder_service
from .infrastructure.config.settings import Settings
from .shared.exceptions.errors import ValidationError
from .shared.logging.config import get_logger, setup_logging

# 設定を読み込み
settings = Settings()

# ロギングを設定
setup_logging(level=settings.log_level, access_log=settings.access_log_enabled)
logger = get_logger(__name__)

# 位置情報を取得して /api/find を呼び出すページ
INDEX_HTML = (Path(__file__).parent / "web" / "index.html").read_text(encoding="utf-8")

UNAVAILABLE_HEADER = "X-Upstream-Unavailable"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """起動・シャットダウン時の処理"""
    logger.info("Application starting up")
    logger.info(f"Environment: {settings.environment}")

    app.state.finder_service = build_finder_service(settings)

    try:
        yield
    finally:
        logger.info("Application shutting down")
        app.state.finder_service.close()


# FastAPIアプリケーションを作成
app = FastAPI(
    title="American Restaurant Finder",
    description="現在地の地名と、近くのアメリカ料理レストラン（最大3件）を返すサービス",
    version="1.0.0",
    lifespan=lifespan,
)


def get_finder_service(request: Request) -> FinderService:
    """リクエストで使う検索サービスを取得"""
    return request.app.state.finder_service


@app.exception_handler(ValidationError)
async def validation_exception_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """入力エラーは400で返す"""
    logger.info(f"Rejected request {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """グローバル例外ハンドラー"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    content = {"message": "Internal server error"}
    if not settings.is_production:
        content["detail"] = str(exc)
    return JSONResponse(status_code=500, content=content)


@app.get("/api/find")
async def find(
    lat: Optional[str] = Query(None),
    lon: Optional[str] = Query(None),
    finder_service: FinderService = Depends(get_finder_service),
) -> JSONResponse:
    """
    座標の地名と近くのレストランを返す

    Args:
        lat: 緯度
        lon: 経度
        finder_service: 検索サービス

    Returns:
        JSONResponse: {date, time, location, restaurants}
    """
    result = await finder_service.handle_find(lat, lon)

    headers = {}
    if result.is_degraded:
        headers[UNAVAILABLE_HEADER] = ",".join(result.unavailable_sources)

    return JSONResponse(content=result.to_response_dict(), headers=headers)


@app.get("/{full_path:path}", response_class=HTMLResponse)
async def index(full_path: str) -> HTMLResponse:
    """その他のパスはすべてページを返す"""
    return HTMLResponse(content=INDEX_HTML)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower(),
        # ロギングは setup_logging の設定をそのまま使う
        log_config=None,
    )
