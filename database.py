"""
데이터베이스 연결 모듈
MySQL 연결 설정 (테스트/로컬에서는 DATABASE_URL로 SQLite 사용 가능)
"""
import logging
from typing import Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

from config import Settings, get_settings

logger = logging.getLogger(__name__)

# Base 클래스
Base = declarative_base()


def build_database_url(settings: Optional[Settings] = None) -> str:
    """설정값으로 SQLAlchemy URL 생성"""
    settings = settings or get_settings()
    if settings.database_url:
        return settings.database_url
    return (
        f"mysql+pymysql://{settings.db_user}:{settings.db_password}"
        f"@{settings.db_host}:{settings.db_port}/{settings.db_name}"
    )


def create_db_engine(
    url: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> Engine:
    """
    SQLAlchemy 엔진(커넥션 풀) 생성.

    프로세스 시작 시 1회 만들고, 종료 시 dispose 한다.

    Args:
        url: 접속 URL (없으면 설정에서 생성)
        settings: Settings (없으면 환경 변수에서 로드)
    """
    settings = settings or get_settings()
    url = url or build_database_url(settings)

    kwargs = {
        "pool_pre_ping": True,
        "echo": False,
    }
    if url.startswith("mysql"):
        kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=0,
            pool_recycle=3600,
            connect_args={"connect_timeout": settings.db_connect_timeout},
        )
    elif url.startswith("sqlite"):
        # FastAPI 스레드풀에서도 같은 커넥션 사용
        kwargs["connect_args"] = {"check_same_thread": False}

    engine = create_engine(url, **kwargs)
    logger.info(f"[DB] 엔진 생성: {engine.url.render_as_string(hide_password=True)}")
    return engine


def test_connection(engine: Engine) -> bool:
    """DB 연결 테스트"""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"DB 연결 실패: {e}")
        return False
