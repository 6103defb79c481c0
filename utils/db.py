"""
SQLite 저장소 관리

이 모듈은 길드 사이트의 임베디드 SQLite DB 연결을 생성하고,
스키마 생성과 기본 데이터 시드를 담당합니다.

모든 연결에서 PRAGMA foreign_keys = ON을 실행하므로
게시글/레이드 일정 삭제 시 댓글/참가자가 DB 레벨에서 함께 삭제됩니다.
"""

import json
import sqlite3


# 글로벌 DB 파일 경로 (app.py에서 초기화)
database_path = None
database_timeout = 5.0


SCHEMA = """
CREATE TABLE IF NOT EXISTS posts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    content TEXT NOT NULL,
    category TEXT DEFAULT '일반',
    sub_category TEXT,
    author TEXT DEFAULT '관리자',
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS settings (
    key TEXT PRIMARY KEY,
    value TEXT
);

CREATE TABLE IF NOT EXISTS raid_schedules (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    raid_name TEXT NOT NULL,
    date TEXT NOT NULL,
    time TEXT NOT NULL,
    difficulty TEXT NOT NULL,
    max_participants INTEGER DEFAULT 8,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS raid_participants (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    schedule_id INTEGER NOT NULL,
    character_name TEXT NOT NULL,
    position TEXT NOT NULL,
    item_level TEXT NOT NULL,
    class_name TEXT NOT NULL,
    synergy TEXT NOT NULL,
    FOREIGN KEY (schedule_id) REFERENCES raid_schedules (id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS comments (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    post_id INTEGER NOT NULL,
    content TEXT NOT NULL,
    author TEXT DEFAULT '길드원',
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
    FOREIGN KEY (post_id) REFERENCES posts (id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS profiles (
    id TEXT PRIMARY KEY,
    nickname TEXT NOT NULL,
    grade TEXT DEFAULT '신입',
    can_manage_members INTEGER DEFAULT 0,
    can_manage_content INTEGER DEFAULT 0,
    can_manage_settings INTEGER DEFAULT 0,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP
);

CREATE UNIQUE INDEX IF NOT EXISTS idx_profiles_nickname ON profiles (nickname);
CREATE INDEX IF NOT EXISTS idx_comments_post_id ON comments (post_id);
CREATE INDEX IF NOT EXISTS idx_raid_participants_schedule_id
    ON raid_participants (schedule_id);
"""


DEFAULT_GRADE_NAMES = ["신입", "길드원", "대리", "팀장", "임원", "부마스터", "마스터"]

DEFAULT_BOSSES = [
    {"id": 1, "name": "카멘", "image": "https://picsum.photos/seed/kamen/400/400",
     "hp": "3000억", "type": "인간/악마", "attribute": "암",
     "dealer_cards": "세상을 구하는 빛", "supporter_cards": "남겨진 바람의 절벽"},
    {"id": 2, "name": "에키드나", "image": "https://picsum.photos/seed/echidna/400/400",
     "hp": "2500억", "type": "악마", "attribute": "성",
     "dealer_cards": "세상을 구하는 빛", "supporter_cards": "남겨진 바람의 절벽"},
    {"id": 3, "name": "베히모스", "image": "https://picsum.photos/seed/behemoth/400/400",
     "hp": "5000억", "type": "용", "attribute": "뇌",
     "dealer_cards": "세상을 구하는 빛", "supporter_cards": "남겨진 바람의 절벽"},
    {"id": 4, "name": "일리아칸", "image": "https://picsum.photos/seed/akkan/400/400",
     "hp": "1800억", "type": "불사", "attribute": "성",
     "dealer_cards": "세상을 구하는 빛", "supporter_cards": "남겨진 바람의 절벽"},
    {"id": 5, "name": "쿠크세이튼", "image": "https://picsum.photos/seed/saydon/400/400",
     "hp": "800억", "type": "악마", "attribute": "성",
     "dealer_cards": "세상을 구하는 빛", "supporter_cards": "남겨진 바람의 절벽"},
]

DEFAULT_SETTINGS = {
    'guild_name': '로스트아크 INXX',
    'guild_description': '최고를 지향하는 로스트아크 INXX 길드입니다.',
    'primary_color': '#8B5CF6',
    'raid_info': '[]',
    'guardians_info': '[]',
    'classes_info': '[]',
    'grade_names': json.dumps(DEFAULT_GRADE_NAMES, ensure_ascii=False),
    'bosses_info': json.dumps(DEFAULT_BOSSES, ensure_ascii=False),
}

BOOTSTRAP_ADMIN = {
    'id': 'admin-id',
    'nickname': '관리자',
    'grade': '마스터',
}

DEFAULT_POSTS = [
    ('[공지] INXX 길드 홈페이지 오픈!',
     '우리 길드만의 전용 홈페이지가 오픈되었습니다. 앞으로 여기서 다양한 소식을 확인하세요.', '공지'),
    ('[이벤트] 길드 레이드 정기 일정 안내',
     '매주 토요일 오후 9시에 정기 레이드가 진행됩니다. 많은 참여 부탁드립니다.', '이벤트'),
    ('카멘 하드 4관문 공략 팁',
     '카멘 하드 4관문에서 주의해야 할 패턴들을 정리해 보았습니다.', '레이드'),
    ('베히모스 가디언 토벌 팁',
     '베히모스 토벌 시 주의해야 할 기믹들을 공유합니다.', '가디언토벌'),
    ('서머너 상향 기원 클래스 게시글',
     '서머너 클래스의 현재 위치와 개선 방향에 대해 논의해봅시다.', '클래스'),
    ('내실 팁: 섬의 마음 획득처 정리',
     '아직 섬의 마음을 다 모으지 못한 분들을 위한 정리글입니다.', '팁'),
    ('우리 길드 단체 스샷!',
     '지난 정기 레이드 끝나고 찍은 단체 사진입니다.', '스크린샷'),
]


def get_db_connection(db_path=None):
    """
    SQLite 연결 생성

    Args:
        db_path (str, optional): DB 파일 경로 (기본값: app.py에서 설정한 경로)

    Returns:
        sqlite3.Connection: row_factory=sqlite3.Row, 외래 키 활성화된 연결

    Raises:
        RuntimeError: DB 경로가 초기화되지 않은 경우

    Example:
        >>> conn = get_db_connection()
        >>> cursor = conn.cursor()
        >>> cursor.execute("SELECT * FROM raid_schedules")
        >>> conn.close()

    Note:
        - 요청마다 새 연결을 열고 finally에서 닫습니다
        - 쓰기 잠금은 timeout(초) 동안 대기 후 OperationalError
        - 외래 키는 연결 단위 설정이므로 매번 켜야 CASCADE가 동작합니다
    """
    path = db_path or database_path
    if path is None:
        raise RuntimeError("Database path not initialized. Call init_schema() first.")

    conn = sqlite3.connect(path, timeout=database_timeout, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_schema(db_path=None, seed_posts=True):
    """
    테이블 생성 + 기본 데이터 시드 (여러 번 호출해도 안전)

    Args:
        db_path (str, optional): DB 파일 경로
        seed_posts (bool): posts 테이블이 비어 있으면 기본 게시글 등록

    Note:
        - 설정/관리자 프로필은 INSERT OR IGNORE (기존 값 유지)
        - 기본 게시글은 테이블이 비어 있을 때만 등록
    """
    conn = get_db_connection(db_path)
    cursor = conn.cursor()

    try:
        cursor.executescript(SCHEMA)

        cursor.executemany(
            "INSERT OR IGNORE INTO settings (key, value) VALUES (?, ?)",
            list(DEFAULT_SETTINGS.items())
        )

        cursor.execute("""
            INSERT OR IGNORE INTO profiles
            (id, nickname, grade, can_manage_members, can_manage_content, can_manage_settings)
            VALUES (?, ?, ?, 1, 1, 1)
        """, (BOOTSTRAP_ADMIN['id'], BOOTSTRAP_ADMIN['nickname'], BOOTSTRAP_ADMIN['grade']))

        if seed_posts:
            cursor.execute("SELECT COUNT(*) FROM posts")
            if cursor.fetchone()[0] == 0:
                cursor.executemany(
                    "INSERT INTO posts (title, content, category) VALUES (?, ?, ?)",
                    DEFAULT_POSTS
                )

        conn.commit()
    finally:
        cursor.close()
        conn.close()


def get_settings(db_path=None):
    """
    전체 설정 조회

    Returns:
        dict: {key: value} (값은 항상 문자열)
    """
    conn = get_db_connection(db_path)
    cursor = conn.cursor()

    try:
        cursor.execute("SELECT key, value FROM settings")
        return {row['key']: row['value'] for row in cursor.fetchall()}
    finally:
        cursor.close()
        conn.close()


def set_settings(values, db_path=None):
    """
    설정 upsert (키 단위 INSERT OR REPLACE)

    Args:
        values (dict): {key: 문자열 값}. 전달되지 않은 키는 그대로 유지

    Example:
        >>> set_settings({'guild_name': 'INXX'})
        >>> set_settings({'primary_color': '#000000'})
        >>> get_settings()['guild_name']
        'INXX'
    """
    conn = get_db_connection(db_path)
    cursor = conn.cursor()

    try:
        for key, value in values.items():
            cursor.execute(
                "INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)",
                (key, value)
            )
        conn.commit()
    finally:
        cursor.close()
        conn.close()
