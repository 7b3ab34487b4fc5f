"""
환경 설정 관리
- DB 접속 정보, MusicBrainz API, API 서버
"""
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # 데이터베이스 (MySQL)
    db_host: str = "localhost"
    db_port: int = 3306
    db_name: str = "playlist_db"
    db_user: str = "admin"
    db_password: str = ""
    db_connect_timeout: int = 30
    db_pool_size: int = 10
    # 설정 시 위 DB_* 값 대신 사용 (예: sqlite:///playlists.db)
    database_url: Optional[str] = None

    # MusicBrainz
    musicbrainz_url: str = "https://musicbrainz.org/ws/2/recording/"
    musicbrainz_user_agent: str = "playlist-song-data/1.0 ( https://musicbrainz.org )"

    # API 서버
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    model_config = SettingsConfigDict(env_file=".env", extra="allow")


@lru_cache
def get_settings() -> Settings:
    """설정 싱글톤 (.env는 최초 1회만 읽음)"""
    return Settings()
