"""
Playlist Song Data API

import/export 파이프라인을 HTTP로 노출하는 서버.
실행: python api.py
"""
from fastapi import FastAPI
import logging

# 로거 설정
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
from contextlib import asynccontextmanager
import uvicorn

from config import get_settings
from PLST import create_store
from PLST.router import router as playlists_router

logger = logging.getLogger(__name__)


# ==================== Lifespan (시작/종료 이벤트) ====================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 시작/종료 시 실행"""
    logger.info("[START] Playlist Song Data API")

    store = create_store()
    app.state.store = store

    if store.ping():
        try:
            store.ensure_schema()
            logger.info("[OK] Database connected")
        except Exception as e:
            logger.warning(f"[WARN] Table creation failed: {e}")
    else:
        logger.warning("[WARN] Database connection failed - API continues")

    yield  # 앱 실행

    store.close()
    logger.info("[STOP] Playlist Song Data API")


# ==================== FastAPI 앱 초기화 ====================

app = FastAPI(
    title="Playlist Song Data API",
    description="플레이리스트 CSV → MusicBrainz 메타데이터 보강 → DB → CSV",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(playlists_router)


# ==================== 서버 실행 ====================

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "api:app",
        host=settings.api_host,
        port=settings.api_port,
    )
