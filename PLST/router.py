"""
PLST Router - FastAPI 엔드포인트

엔드포인트:
- GET  /api/playlists/health : DB 연결 상태
- GET  /api/playlists        : 저장된 전체 행
- POST /api/playlists/import : CSV → DB
- POST /api/playlists/export : DB → CSV
"""
import csv
import logging
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from .constants import INPUT_CSV, OUTPUT_CSV
from .exporter import export_playlists
from .importer import import_playlists
from .store import PlaylistStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/playlists", tags=["Playlists"])


# ==================== Request / Response Models ====================


class PlaylistEntryResponse(BaseModel):
    playlist_name: str
    song_name: str
    song_url: str
    album: Optional[str] = None
    artist: Optional[str] = None
    release_date: Optional[str] = None
    duration: Optional[str] = None


class ImportResponse(BaseModel):
    total: int
    inserted: int
    skipped: int
    enriched: int


class ExportResponse(BaseModel):
    written: bool
    rows: int
    path: str


class HealthResponse(BaseModel):
    status: str
    database: bool
    rows: Optional[int] = None


# ==================== Store Dependency ====================

def get_store(request: Request) -> PlaylistStore:
    """lifespan에서 만든 PlaylistStore"""
    return request.app.state.store


# ==================== Endpoints ====================


@router.get("/health", response_model=HealthResponse)
def health(store: PlaylistStore = Depends(get_store)):
    connected = store.ping()
    rows = None
    if connected:
        try:
            rows = store.count()
        except SQLAlchemyError as e:
            logger.warning(f"[PLST Router] count 실패: {e}")
    return HealthResponse(status="ok", database=connected, rows=rows)


@router.get("", response_model=List[PlaylistEntryResponse])
def list_entries(store: PlaylistStore = Depends(get_store)):
    try:
        return [PlaylistEntryResponse(**asdict(e)) for e in store.read_all()]
    except SQLAlchemyError as e:
        logger.error(f"[PLST Router] 조회 실패: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/import", response_model=ImportResponse)
async def run_import(store: PlaylistStore = Depends(get_store)):
    """
    작업 디렉토리의 playlistholder.csv로 playlists 테이블을 채운다.

    경로는 고정이며 요청으로 바꿀 수 없다.
    """
    csv_path = Path.cwd() / INPUT_CSV
    try:
        summary = await import_playlists(csv_path, store)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail=f"CSV not found: {INPUT_CSV}")
    except (OSError, UnicodeDecodeError, csv.Error, SQLAlchemyError) as e:
        logger.error(f"[PLST Router] import 실패: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return ImportResponse(**asdict(summary))


@router.post("/export", response_model=ExportResponse)
def run_export(store: PlaylistStore = Depends(get_store)):
    """playlists 테이블을 작업 디렉토리의 output.csv로 내보낸다."""
    output_path = Path.cwd() / OUTPUT_CSV
    try:
        rows = export_playlists(store, output_path)
    except (OSError, SQLAlchemyError) as e:
        logger.error(f"[PLST Router] export 실패: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return ExportResponse(written=rows > 0, rows=rows, path=OUTPUT_CSV)
