"""
Pytest fixtures

- DB: tmp_path 아래 SQLite 파일 (MySQL 서버 불필요)
- MusicBrainz: httpx.MockTransport (네트워크 불필요)
"""
import sys
from pathlib import Path

import httpx
import pytest

# 프로젝트 루트를 path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import database
from PLST import musicbrainz
from PLST.musicbrainz import FetchResult, SongMetadata
from PLST.store import PlaylistStore


BOHEMIAN_PAYLOAD = {
    "recordings": [
        {
            "title": "Bohemian Rhapsody",
            "length": 354000,
            "artist-credit": [{"name": "Queen"}],
            "releases": [
                {"title": "A Night at the Opera", "date": "1975-11-21"},
                {"title": "Greatest Hits", "date": "1981-10-26"},
            ],
        },
        {
            "title": "Bohemian Rhapsody (live)",
            "length": 360000,
            "artist-credit": [{"name": "Queen"}],
            "releases": [{"title": "Live Killers", "date": "1979"}],
        },
    ]
}


@pytest.fixture
def bohemian_payload():
    """MusicBrainz recording 검색 응답 예시"""
    return BOHEMIAN_PAYLOAD


@pytest.fixture
def make_store(tmp_path):
    """이름별 SQLite 파일로 PlaylistStore 생성 (테이블 포함)"""
    stores = []

    def _make(name: str = "playlists.db") -> PlaylistStore:
        engine = database.create_db_engine(url=f"sqlite:///{tmp_path / name}")
        store = PlaylistStore(engine)
        store.ensure_schema()
        stores.append(store)
        return store

    yield _make

    for store in stores:
        store.close()


@pytest.fixture
def store(make_store):
    return make_store()


@pytest.fixture
def write_csv(tmp_path):
    """행 리스트로 CSV 파일 작성 (첫 행은 헤더)"""

    def _write(rows, name: str = "playlistholder.csv", header=("Playlist", "Song", "URL")) -> Path:
        path = tmp_path / name
        lines = [",".join(header)] + [",".join(r) for r in rows]
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def mb_requests():
    """MockTransport가 받은 요청 기록"""
    return []


@pytest.fixture
def make_client(mb_requests):
    """handler(request) -> httpx.Response 로 AsyncClient 생성"""

    def _make(handler) -> httpx.AsyncClient:
        def _record(request: httpx.Request) -> httpx.Response:
            mb_requests.append(request)
            return handler(request)

        return httpx.AsyncClient(transport=httpx.MockTransport(_record))

    return _make


@pytest.fixture
def ok_client(make_client):
    return make_client(lambda request: httpx.Response(200, json=BOHEMIAN_PAYLOAD))


@pytest.fixture
def fake_fetch(monkeypatch):
    """musicbrainz.fetch_recording 을 고정 결과로 대체, 호출 인자 기록"""
    calls = []

    async def _fake(song_name, artist_name="", client=None):
        calls.append((song_name, artist_name))
        return FetchResult(
            metadata=SongMetadata(
                album="A Night at the Opera",
                artist="Queen",
                release_date="1975-11-21",
                duration="5:54",
            )
        )

    monkeypatch.setattr(musicbrainz, "fetch_recording", _fake)
    return calls
