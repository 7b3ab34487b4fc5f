"""
Playlist Store - playlists 테이블 접근

중복 방지는 스키마 제약이 아니라 exists() 조회로 한다.
모든 연산은 호출마다 세션(커넥션)을 하나 빌리고 반납한다.
"""
import logging
from contextlib import contextmanager
from dataclasses import dataclass, astuple
from typing import Iterator, List, Optional

from sqlalchemy import Column, Integer, String, Text, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from database import Base, create_db_engine, test_connection
from .constants import EXPORT_COLUMNS, TABLE_NAME

logger = logging.getLogger(__name__)


class PlaylistRecord(Base):
    """playlists 테이블"""
    __tablename__ = TABLE_NAME

    id = Column(Integer, primary_key=True, autoincrement=True)
    playlist_name = Column(String(255), nullable=False)
    song_name = Column(String(255), nullable=False)
    song_url = Column(Text, nullable=False)
    album = Column(String(255))
    artist = Column(String(255))
    release_date = Column(String(50))
    duration = Column(String(50))


@dataclass
class PlaylistEntry:
    """저장되는 한 행 (CSV 원본 + 보강 필드)"""
    playlist_name: str
    song_name: str
    song_url: str
    album: str
    artist: str
    release_date: str
    duration: str

    def as_params(self) -> dict:
        return dict(zip(EXPORT_COLUMNS, astuple(self)))


EXISTS_QUERY = text(f"""
    SELECT 1 FROM {TABLE_NAME}
    WHERE playlist_name = :playlist_name AND song_name = :song_name
    LIMIT 1
""")

INSERT_QUERY = text(f"""
    INSERT INTO {TABLE_NAME}
        (playlist_name, song_name, song_url, album, artist, release_date, duration)
    VALUES
        (:playlist_name, :song_name, :song_url, :album, :artist, :release_date, :duration)
""")

SELECT_ALL_QUERY = text(f"SELECT {', '.join(EXPORT_COLUMNS)} FROM {TABLE_NAME}")

COUNT_QUERY = text(f"SELECT COUNT(*) FROM {TABLE_NAME}")


class PlaylistStore:
    """
    playlists 테이블 클라이언트.

    프로세스 시작 시 엔진과 함께 1회 생성해서 파이프라인에 넘기고,
    종료 시 close()로 커넥션 풀을 정리한다.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
        finally:
            db.close()

    def ensure_schema(self) -> None:
        """테이블이 없으면 생성 (매 실행 호출해도 안전)"""
        Base.metadata.create_all(bind=self.engine, tables=[PlaylistRecord.__table__])
        logger.info(f"[Store] Created '{TABLE_NAME}' table if not existing.")

    def exists(self, playlist_name: str, song_name: str) -> bool:
        with self.session() as db:
            row = db.execute(
                EXISTS_QUERY,
                {"playlist_name": playlist_name, "song_name": song_name},
            ).first()
        return row is not None

    def insert(self, entry: PlaylistEntry) -> None:
        with self.session() as db:
            db.execute(INSERT_QUERY, entry.as_params())
            db.commit()

    def read_all(self) -> List[PlaylistEntry]:
        """전체 행 조회 (정렬 없음)"""
        with self.session() as db:
            rows = db.execute(SELECT_ALL_QUERY).fetchall()
        return [PlaylistEntry(*row) for row in rows]

    def count(self) -> int:
        with self.session() as db:
            return int(db.execute(COUNT_QUERY).scalar() or 0)

    def ping(self) -> bool:
        """DB 연결 확인"""
        return test_connection(self.engine)

    def close(self) -> None:
        self.engine.dispose()


def create_store(engine: Optional[Engine] = None) -> PlaylistStore:
    """설정 기반 엔진으로 PlaylistStore 생성"""
    if engine is None:
        engine = create_db_engine()
    return PlaylistStore(engine)
