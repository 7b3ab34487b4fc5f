"""
MusicBrainz API Client - 곡 메타데이터 조회

곡명(+선택적 아티스트명)으로 recording 검색을 하고
첫 번째 결과만 사용한다. 매칭/점수화는 하지 않는다.

엔드포인트: GET https://musicbrainz.org/ws/2/recording/?query={q}&fmt=json
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from config import get_settings
from .constants import (
    DEFAULT_ALBUM, DEFAULT_ARTIST, DEFAULT_RELEASE_DATE, DEFAULT_DURATION,
)

logger = logging.getLogger(__name__)


@dataclass
class SongMetadata:
    """조회 결과를 정규화한 메타데이터"""
    album: str
    artist: str
    release_date: str
    duration: str


@dataclass
class FetchResult:
    """
    조회 결과.

    metadata: 성공 시 SongMetadata, 실패 시 None
    error: 실패 사유 (HTTP 상태, 결과 없음, 예외 메시지)
    """
    metadata: Optional[SongMetadata] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.metadata is not None


def format_duration(length_ms: Any) -> str:
    """밀리초 → "M:SS" (값이 없거나 0이면 기본값)"""
    if not length_ms:
        return DEFAULT_DURATION
    length_ms = int(length_ms)
    minutes = length_ms // 60000
    seconds = (length_ms % 60000) // 1000
    return f"{minutes}:{seconds:02d}"


def build_query(song_name: str, artist_name: str = "") -> str:
    return " ".join(part for part in (song_name, artist_name) if part).strip()


def parse_recording(payload: Dict) -> Optional[SongMetadata]:
    """
    검색 응답에서 첫 번째 recording을 SongMetadata로 변환한다.

    Returns:
        recording이 없으면 None
    """
    recordings = payload.get("recordings") or []
    if not recordings:
        return None

    recording = recordings[0]
    releases = recording.get("releases") or []
    first_release = releases[0] if releases else {}
    credits = recording.get("artist-credit") or []
    first_credit = credits[0] if credits else {}

    return SongMetadata(
        album=first_release.get("title") or DEFAULT_ALBUM,
        artist=first_credit.get("name") or DEFAULT_ARTIST,
        release_date=first_release.get("date") or DEFAULT_RELEASE_DATE,
        duration=format_duration(recording.get("length")),
    )


async def _request(client: httpx.AsyncClient, url: str, query: str) -> httpx.Response:
    return await client.get(url, params={"query": query, "fmt": "json"})


async def fetch_recording(
    song_name: str,
    artist_name: str = "",
    client: Optional[httpx.AsyncClient] = None,
) -> FetchResult:
    """
    곡 메타데이터를 1회 조회한다 (재시도 없음).

    Args:
        song_name: 곡명
        artist_name: 아티스트명 (선택)
        client: 재사용할 httpx.AsyncClient (없으면 호출마다 생성)

    Returns:
        FetchResult - 예외를 던지지 않는다
    """
    settings = get_settings()
    query = build_query(song_name, artist_name)

    try:
        if client is None:
            headers = {"User-Agent": settings.musicbrainz_user_agent}
            async with httpx.AsyncClient(headers=headers) as own_client:
                resp = await _request(own_client, settings.musicbrainz_url, query)
        else:
            resp = await _request(client, settings.musicbrainz_url, query)

        if not resp.is_success:
            logger.error(
                f"[MusicBrainz] '{song_name}' 조회 실패: "
                f"HTTP {resp.status_code} {resp.reason_phrase}"
            )
            return FetchResult(error=f"HTTP {resp.status_code} {resp.reason_phrase}")

        metadata = parse_recording(resp.json())
        if metadata is None:
            logger.warning(f"[MusicBrainz] No data found for '{song_name}'.")
            return FetchResult(error="no match")

        logger.debug(f"[MusicBrainz] '{song_name}' → {metadata}")
        return FetchResult(metadata=metadata)

    except Exception as e:
        logger.error(f"[MusicBrainz] '{song_name}' → error: {e}")
        return FetchResult(error=str(e) or type(e).__name__)


async def fetch_metadata(
    song_name: str,
    artist_name: str = "",
    client: Optional[httpx.AsyncClient] = None,
) -> Optional[SongMetadata]:
    """fetch_recording의 간단 버전: 실패 시 None"""
    result = await fetch_recording(song_name, artist_name, client=client)
    return result.metadata
