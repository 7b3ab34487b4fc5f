"""
Playlist Song Data Generator

실행: python main.py
1. playlists 테이블 생성 (없으면)
2. ./playlistholder.csv → DB (MusicBrainz 메타데이터 보강)
3. DB → ./output.csv
"""
import asyncio
import logging
from pathlib import Path

# 로거 설정
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

from PLST import create_store, import_playlists, export_playlists, PlaylistStore
from PLST.constants import INPUT_CSV, OUTPUT_CSV

logger = logging.getLogger(__name__)


async def run(store: PlaylistStore) -> None:
    """
    테이블 생성 → import → export 순서로 1회 실행.

    각 단계의 실패는 로그만 남기고 다음 단계로 넘어간다.
    """
    csv_path = Path.cwd() / INPUT_CSV
    output_path = Path.cwd() / OUTPUT_CSV

    try:
        store.ensure_schema()
    except Exception:
        logger.exception("Error creating or altering table")

    try:
        await import_playlists(csv_path, store)
    except Exception:
        logger.exception("Error processing CSV file")

    try:
        export_playlists(store, output_path)
    except Exception:
        logger.exception("Error exporting playlist")


def main() -> None:
    store = create_store()
    try:
        asyncio.run(run(store))
    finally:
        store.close()


if __name__ == "__main__":
    main()
