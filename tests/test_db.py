"""Store: 스키마 초기화, 시드, CASCADE, 설정 upsert"""

import json

from utils.db import (
    DEFAULT_GRADE_NAMES,
    DEFAULT_POSTS,
    DEFAULT_SETTINGS,
    get_db_connection,
    get_settings,
    init_schema,
    set_settings,
)


def count(table, where='', params=()):
    conn = get_db_connection()
    try:
        return conn.execute(f"SELECT COUNT(*) FROM {table} {where}", params).fetchone()[0]
    finally:
        conn.close()


def test_init_schema_seeds_defaults(app):
    settings = get_settings()

    assert set(DEFAULT_SETTINGS) <= set(settings)
    assert settings['raid_info'] == '[]'
    assert json.loads(settings['grade_names']) == DEFAULT_GRADE_NAMES
    assert len(json.loads(settings['bosses_info'])) == 5

    conn = get_db_connection()
    try:
        admin = conn.execute("SELECT * FROM profiles WHERE id = 'admin-id'").fetchone()
    finally:
        conn.close()

    assert admin['grade'] == '마스터'
    assert (admin['can_manage_members'], admin['can_manage_content'], admin['can_manage_settings']) == (1, 1, 1)


def test_init_schema_is_idempotent(app):
    set_settings({'guild_name': '바뀐 이름'})

    init_schema(seed_posts=True)
    init_schema(seed_posts=True)

    assert get_settings()['guild_name'] == '바뀐 이름'
    assert count('settings') == len(DEFAULT_SETTINGS)
    assert count('profiles') == 1
    assert count('posts') == len(DEFAULT_POSTS)


def test_default_posts_not_seeded_into_non_empty_table(app):
    conn = get_db_connection()
    try:
        conn.execute("INSERT INTO posts (title, content) VALUES ('기존 글', '내용')")
        conn.commit()
    finally:
        conn.close()

    init_schema(seed_posts=True)

    assert count('posts') == 1


def test_set_settings_keeps_unrelated_keys(app):
    set_settings({'a': '1'})
    set_settings({'b': '2'})

    settings = get_settings()
    assert settings['a'] == '1'
    assert settings['b'] == '2'


def test_set_settings_replaces_existing_key(app):
    set_settings({'primary_color': '#000000'})

    assert get_settings()['primary_color'] == '#000000'
    assert count('settings', "WHERE key = 'primary_color'") == 1


def test_raw_post_delete_cascades_to_its_comments_only(app):
    conn = get_db_connection()
    try:
        first = conn.execute("INSERT INTO posts (title, content) VALUES ('A', 'a')").lastrowid
        second = conn.execute("INSERT INTO posts (title, content) VALUES ('B', 'b')").lastrowid
        conn.executemany(
            "INSERT INTO comments (post_id, content) VALUES (?, ?)",
            [(first, 'c1'), (first, 'c2'), (second, 'c3')]
        )
        conn.commit()

        conn.execute("DELETE FROM posts WHERE id = ?", (first,))
        conn.commit()
    finally:
        conn.close()

    assert count('comments', 'WHERE post_id = ?', (first,)) == 0
    assert count('comments', 'WHERE post_id = ?', (second,)) == 1


def test_comment_defaults(app):
    conn = get_db_connection()
    try:
        post_id = conn.execute("INSERT INTO posts (title, content) VALUES ('A', 'a')").lastrowid
        conn.execute("INSERT INTO comments (post_id, content) VALUES (?, 'hi')", (post_id,))
        conn.commit()
        post = conn.execute("SELECT * FROM posts WHERE id = ?", (post_id,)).fetchone()
        comment = conn.execute("SELECT * FROM comments WHERE post_id = ?", (post_id,)).fetchone()
    finally:
        conn.close()

    assert post['category'] == '일반'
    assert post['author'] == '관리자'
    assert post['created_at'] is not None
    assert comment['author'] == '길드원'
