"""
입력 CSV 파서

형식: playlist_name, song_name, song_url (첫 행은 헤더로 간주하고 버림)
"""
import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

logger = logging.getLogger(__name__)


@dataclass
class CsvRow:
    """입력 CSV 한 행"""
    playlist_name: str
    song_name: str
    song_url: str


def read_playlist_csv(path: Union[str, Path]) -> List[CsvRow]:
    """
    CSV 파일 전체를 메모리로 읽는다.

    열 개수/타입 검증은 하지 않는다. 부족한 열은 빈 문자열,
    남는 열은 무시한다. 파일을 열 수 없으면 OSError가 그대로 전파된다.
    """
    logger.info(f"[CSV] Reading CSV file: {path}")

    rows = []
    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        reader = csv.reader(f)
        next(reader, None)  # 헤더
        for cells in reader:
            if not cells:
                continue
            cells = (cells + ["", "", ""])[:3]
            rows.append(CsvRow(*cells))

    logger.info(f"[CSV] Successfully read {len(rows)} records from the CSV file.")
    return rows
