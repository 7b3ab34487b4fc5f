"""
PLST - Playlist Song Data Pipeline

플레이리스트 CSV를 MusicBrainz 메타데이터로 보강해서 DB에 저장하고,
다시 CSV로 내보낸다.

흐름:
1. CSV 읽기 (playlist_name, song_name, song_url)
2. (playlist_name, song_name) 중복 확인
3. MusicBrainz 조회 (실패 시 "Unknown")
4. playlists 테이블 INSERT
5. 전체 행 CSV export
"""
from .store import PlaylistStore, PlaylistEntry, create_store
from .importer import import_playlists, ImportSummary
from .exporter import export_playlists
