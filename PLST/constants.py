"""
PLST Constants - 기본값 및 컬럼 순서
"""

# MusicBrainz 응답에 값이 없을 때 사용하는 기본값
DEFAULT_ALBUM = "Unknown Album"
DEFAULT_ARTIST = "Unknown Artist"
DEFAULT_RELEASE_DATE = "Unknown Release Date"
DEFAULT_DURATION = "Unknown Duration"

# 메타데이터 조회 자체가 실패했을 때 네 필드 모두에 저장하는 값
UNKNOWN = "Unknown"

# 입력 CSV 컬럼 (위치 기반, 헤더 행은 무시)
CSV_COLUMNS = ["playlist_name", "song_name", "song_url"]

# 보강 필드
ENRICHMENT_COLUMNS = ["album", "artist", "release_date", "duration"]

# 출력 CSV / playlists 테이블 컬럼 순서
EXPORT_COLUMNS = CSV_COLUMNS + ENRICHMENT_COLUMNS

TABLE_NAME = "playlists"

# 입출력 파일 (작업 디렉토리 기준, 고정)
INPUT_CSV = "playlistholder.csv"
OUTPUT_CSV = "output.csv"
