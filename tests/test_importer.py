"""
Tests for PLST/importer.py - CSV → MusicBrainz → DB
"""
import httpx
import pandas as pd
import pytest
from sqlalchemy.exc import OperationalError

from PLST.constants import UNKNOWN
from PLST.exporter import export_playlists
from PLST.importer import ImportSummary, import_playlists
from PLST.store import PlaylistStore

ROWS = [
    ("Road Trip", "Bohemian Rhapsody", "http://example.com/song1"),
    ("Road Trip", "Hotel California", "http://example.com/song2"),
    ("Chill", "Bohemian Rhapsody", "http://example.com/song1"),
]


@pytest.mark.asyncio
async def test_imports_every_new_row(store, write_csv, ok_client):
    async with ok_client as client:
        summary = await import_playlists(write_csv(ROWS), store, client=client)

    assert summary == ImportSummary(total=3, inserted=3, skipped=0, enriched=3)
    entries = store.read_all()
    assert len(entries) == 3
    for entry in entries:
        assert entry.album == "A Night at the Opera"
        assert entry.artist == "Queen"
        assert entry.release_date == "1975-11-21"
        assert entry.duration == "5:54"


@pytest.mark.asyncio
async def test_second_run_inserts_nothing(store, write_csv, ok_client, mb_requests):
    path = write_csv(ROWS)
    async with ok_client as client:
        await import_playlists(path, store, client=client)
        fetched = len(mb_requests)
        summary = await import_playlists(path, store, client=client)

    assert summary == ImportSummary(total=3, inserted=0, skipped=3, enriched=0)
    assert store.count() == 3
    # 이미 있는 행은 조회하지 않음
    assert len(mb_requests) == fetched


@pytest.mark.asyncio
async def test_duplicate_rows_in_same_file_inserted_once(store, write_csv, ok_client):
    async with ok_client as client:
        summary = await import_playlists(write_csv([ROWS[0], ROWS[0]]), store, client=client)

    assert summary.inserted == 1
    assert summary.skipped == 1
    assert store.count() == 1


@pytest.mark.asyncio
async def test_http_error_defaults_every_enrichment_field(store, write_csv, make_client):
    async with make_client(lambda request: httpx.Response(500)) as client:
        summary = await import_playlists(write_csv(ROWS[:2]), store, client=client)

    assert summary.inserted == 2
    assert summary.enriched == 0
    for entry in store.read_all():
        assert (entry.album, entry.artist, entry.release_date, entry.duration) == (UNKNOWN,) * 4


@pytest.mark.asyncio
async def test_search_uses_song_name_only(store, write_csv, ok_client, mb_requests):
    async with ok_client as client:
        await import_playlists(write_csv(ROWS[:1]), store, client=client)

    assert mb_requests[0].url.params["query"] == "Bohemian Rhapsody"


@pytest.mark.asyncio
async def test_missing_url_stored_as_empty_string(store, tmp_path, ok_client):
    path = tmp_path / "in.csv"
    path.write_text("playlist,song,url\nGym,Eye of the Tiger\n", encoding="utf-8")

    async with ok_client as client:
        await import_playlists(path, store, client=client)

    assert store.read_all()[0].song_url == ""


@pytest.mark.asyncio
async def test_missing_csv_propagates(store, tmp_path, ok_client):
    async with ok_client as client:
        with pytest.raises(FileNotFoundError):
            await import_playlists(tmp_path / "missing.csv", store, client=client)
    assert store.count() == 0


class FailingStore(PlaylistStore):
    """N번째 insert에서 DB 오류"""

    def __init__(self, engine, fail_on: int):
        super().__init__(engine)
        self.fail_on = fail_on
        self.calls = 0

    def insert(self, entry):
        self.calls += 1
        if self.calls == self.fail_on:
            raise OperationalError("INSERT", {}, Exception("connection lost"))
        super().insert(entry)


@pytest.mark.asyncio
async def test_store_failure_aborts_remaining_rows(store, write_csv, ok_client):
    failing = FailingStore(store.engine, fail_on=2)

    async with ok_client as client:
        with pytest.raises(OperationalError):
            await import_playlists(write_csv(ROWS), failing, client=client)

    # 실패 이전 행은 롤백되지 않음
    assert [e.song_name for e in store.read_all()] == ["Bohemian Rhapsody"]


@pytest.mark.asyncio
async def test_export_then_reimport_keeps_triples(make_store, write_csv, ok_client, tmp_path):
    source = make_store("source.db")
    target = make_store("target.db")

    async with ok_client as client:
        await import_playlists(write_csv(ROWS), source, client=client)
        export_path = tmp_path / "output.csv"
        export_playlists(source, export_path)

        exported = pd.read_csv(export_path, dtype=str, keep_default_na=False)
        reimport_path = tmp_path / "reimport.csv"
        exported[["playlist_name", "song_name", "song_url"]].to_csv(reimport_path, index=False)

        await import_playlists(reimport_path, target, client=client)

    def triples(s):
        return sorted((e.playlist_name, e.song_name, e.song_url) for e in s.read_all())

    assert triples(target) == triples(source) == sorted(ROWS)


@pytest.mark.asyncio
async def test_default_client_is_created(store, write_csv, fake_fetch):
    summary = await import_playlists(write_csv(ROWS[:1]), store)

    assert summary.enriched == 1
    assert fake_fetch == [("Bohemian Rhapsody", "")]
