"""
Import Pipeline - CSV → MusicBrainz 보강 → playlists 테이블

CSV 행을 파일 순서대로 하나씩 처리한다.
(playlist_name, song_name) 이 이미 있으면 건너뛰고,
없으면 메타데이터를 조회해서 한 행을 추가한다.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import httpx

from config import get_settings
from . import musicbrainz
from .constants import UNKNOWN
from .csv_reader import CsvRow, read_playlist_csv
from .store import PlaylistEntry, PlaylistStore

logger = logging.getLogger(__name__)


@dataclass
class ImportSummary:
    """import 실행 결과 카운터"""
    total: int = 0
    inserted: int = 0
    skipped: int = 0
    enriched: int = 0


def build_entry(row: CsvRow, result: musicbrainz.FetchResult) -> PlaylistEntry:
    """CSV 행 + 조회 결과 → PlaylistEntry (조회 실패 시 보강 필드는 전부 "Unknown")"""
    metadata = result.metadata
    return PlaylistEntry(
        playlist_name=row.playlist_name,
        song_name=row.song_name,
        song_url=row.song_url or "",
        album=(metadata.album if metadata else None) or UNKNOWN,
        artist=(metadata.artist if metadata else None) or UNKNOWN,
        release_date=(metadata.release_date if metadata else None) or UNKNOWN,
        duration=(metadata.duration if metadata else None) or UNKNOWN,
    )


async def _import_rows(
    csv_path: Union[str, Path],
    store: PlaylistStore,
    client: httpx.AsyncClient,
) -> ImportSummary:
    records = read_playlist_csv(csv_path)
    summary = ImportSummary(total=len(records))

    for record in records:
        if store.exists(record.playlist_name, record.song_name):
            logger.info(
                f"[Import] Song '{record.song_name}' already exists in playlist "
                f"'{record.playlist_name}'. Skipping."
            )
            summary.skipped += 1
            continue

        # 아티스트명은 넘기지 않는다 (곡명 단독 검색)
        result = await musicbrainz.fetch_recording(record.song_name, client=client)
        if result.ok:
            summary.enriched += 1
        else:
            logger.info(
                f"[Import] '{record.song_name}' 메타데이터 없음 ({result.error}) → Unknown"
            )

        store.insert(build_entry(record, result))
        summary.inserted += 1
        logger.info(
            f"[Import] Inserted record: Playlist = {record.playlist_name}, "
            f"Song = {record.song_name}"
        )

    return summary


async def import_playlists(
    csv_path: Union[str, Path],
    store: PlaylistStore,
    client: Optional[httpx.AsyncClient] = None,
) -> ImportSummary:
    """
    CSV 파일로 playlists 테이블을 채운다.

    Args:
        csv_path: 입력 CSV 경로
        store: PlaylistStore
        client: MusicBrainz 호출에 쓸 httpx.AsyncClient (없으면 실행 동안 1개 생성)

    Returns:
        ImportSummary

    Raises:
        OSError: CSV를 읽을 수 없을 때
        SQLAlchemyError: DB 연산 실패 시 (남은 행은 처리하지 않음)
    """
    if client is None:
        headers = {"User-Agent": get_settings().musicbrainz_user_agent}
        async with httpx.AsyncClient(headers=headers) as own_client:
            summary = await _import_rows(csv_path, store, own_client)
    else:
        summary = await _import_rows(csv_path, store, client)

    logger.info(
        f"[Import] 완료: {summary.total}행 중 {summary.inserted}행 추가, "
        f"{summary.skipped}행 건너뜀, {summary.enriched}행 메타데이터 보강"
    )
    return summary
