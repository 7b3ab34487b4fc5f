"""
Export Pipeline - playlists 테이블 → CSV
"""
import logging
from dataclasses import astuple
from pathlib import Path
from typing import Union

import pandas as pd

from .constants import EXPORT_COLUMNS
from .store import PlaylistStore

logger = logging.getLogger(__name__)


def export_playlists(store: PlaylistStore, output_path: Union[str, Path]) -> int:
    """
    전체 행을 헤더 포함 CSV로 쓴다 (기존 파일 덮어씀).

    Returns:
        기록한 행 수. 테이블이 비어 있으면 파일을 만들지 않고 0.
    """
    rows = store.read_all()
    logger.info(f"[Export] Fetched {len(rows)} rows from database.")

    if not rows:
        logger.info("[Export] No records found in the database.")
        return 0

    df = pd.DataFrame([astuple(r) for r in rows], columns=EXPORT_COLUMNS)
    df.to_csv(output_path, index=False, encoding="utf-8")

    logger.info(f"[Export] File written successfully: {output_path}")
    return len(df)
