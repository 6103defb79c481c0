"""
게시글/댓글 라우트

- GET    /api/posts: 게시글 목록 (최신순)
- POST   /api/posts: 게시글 작성
- DELETE /api/posts/<id>: 게시글 삭제 (댓글 CASCADE)
- GET    /api/posts/<id>/comments: 댓글 목록 (작성순)
- POST   /api/posts/<id>/comments: 댓글 작성 + NEW_COMMENT 실시간 알림
"""

import sqlite3

from flask import Blueprint, jsonify, current_app
from utils.db import get_db_connection
from utils.logging_setup import log_api_call, log_admin_action
from utils.notifier import build_comment_event
from utils.responses import success, created, error_response
from utils.validators import ValidationError, get_json_object, require_fields, optional_field

bp = Blueprint('posts', __name__)

DEFAULT_CATEGORY = '일반'
DEFAULT_COMMENT_AUTHOR = '길드원'


@bp.route('/api/posts', methods=['GET'])
def list_posts():
    """게시글 목록 (created_at 내림차순)"""
    conn = None
    cursor = None

    try:
        conn = get_db_connection()
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM posts ORDER BY created_at DESC, id DESC")
        return jsonify([dict(row) for row in cursor.fetchall()])

    except Exception as e:
        current_app.logger.error(f"게시글 조회 실패: {str(e)}", exc_info=True)
        return error_response("게시글 조회에 실패했습니다.", 500)

    finally:
        if cursor:
            cursor.close()
        if conn:
            conn.close()


@bp.route('/api/posts', methods=['POST'])
def create_post():
    """
    게시글 작성 API

    Body:
    - title (필수)
    - content (필수)
    - category (선택, 기본 '일반')
    - sub_category (선택)
    """
    conn = None
    cursor = None

    try:
        data = get_json_object()
        fields = require_fields(data, ['title', 'content'])
        category = optional_field(data, 'category', DEFAULT_CATEGORY)
        sub_category = optional_field(data, 'sub_category')

        log_api_call(current_app, "POST /api/posts", {'title': fields['title'], 'category': category})

        conn = get_db_connection()
        cursor = conn.cursor()
        cursor.execute("""
            INSERT INTO posts (title, content, category, sub_category)
            VALUES (?, ?, ?, ?)
        """, (fields['title'], fields['content'], category, sub_category))
        conn.commit()

        return created(cursor.lastrowid)

    except ValidationError as e:
        current_app.logger.warning(f"게시글 입력 에러: {str(e)}")
        return error_response(str(e), 400)

    except Exception as e:
        current_app.logger.error(f"게시글 작성 실패: {str(e)}", exc_info=True)
        return error_response("게시글 작성에 실패했습니다.", 500)

    finally:
        if cursor:
            cursor.close()
        if conn:
            conn.close()


@bp.route('/api/posts/<int:post_id>', methods=['DELETE'])
def delete_post(post_id):
    """게시글 삭제 (댓글은 ON DELETE CASCADE로 함께 삭제)"""
    conn = None
    cursor = None

    try:
        conn = get_db_connection()
        cursor = conn.cursor()
        cursor.execute("DELETE FROM posts WHERE id = ?", (post_id,))
        conn.commit()

        log_admin_action(current_app, "DELETE_POST", {'post_id': post_id, 'deleted': cursor.rowcount})
        return success()

    except Exception as e:
        current_app.logger.error(f"게시글 삭제 실패: {str(e)}", exc_info=True)
        return error_response("게시글 삭제에 실패했습니다.", 500)

    finally:
        if cursor:
            cursor.close()
        if conn:
            conn.close()


@bp.route('/api/posts/<int:post_id>/comments', methods=['GET'])
def list_comments(post_id):
    """댓글 목록 (created_at 오름차순)"""
    conn = None
    cursor = None

    try:
        conn = get_db_connection()
        cursor = conn.cursor()
        cursor.execute("""
            SELECT * FROM comments
            WHERE post_id = ?
            ORDER BY created_at ASC, id ASC
        """, (post_id,))
        return jsonify([dict(row) for row in cursor.fetchall()])

    except Exception as e:
        current_app.logger.error(f"댓글 조회 실패: {str(e)}", exc_info=True)
        return error_response("댓글 조회에 실패했습니다.", 500)

    finally:
        if cursor:
            cursor.close()
        if conn:
            conn.close()


@bp.route('/api/posts/<int:post_id>/comments', methods=['POST'])
def create_comment(post_id):
    """
    댓글 작성 API

    Body:
    - content (필수)
    - author (선택, 기본 '길드원')

    처리 순서:
    1. 댓글 INSERT + commit
    2. 게시글 제목 조회
    3. NEW_COMMENT 브로드캐스트 (실패해도 응답은 성공)
    """
    conn = None
    cursor = None

    try:
        data = get_json_object()
        content = require_fields(data, ['content'])['content']
        if not isinstance(content, str):
            raise ValidationError("댓글 내용은 문자열이어야 합니다.")
        author = optional_field(data, 'author', DEFAULT_COMMENT_AUTHOR)

        log_api_call(current_app, f"POST /api/posts/{post_id}/comments", {'author': author})

        conn = get_db_connection()
        cursor = conn.cursor()
        cursor.execute("""
            INSERT INTO comments (post_id, content, author)
            VALUES (?, ?, ?)
        """, (post_id, content, author))
        conn.commit()
        comment_id = cursor.lastrowid

    except ValidationError as e:
        current_app.logger.warning(f"댓글 입력 에러: {str(e)}")
        return error_response(str(e), 400)

    except sqlite3.IntegrityError as e:
        # 존재하지 않는 게시글 (외래 키 위반)
        current_app.logger.warning(f"댓글 작성 거부 | Post: {post_id} | {str(e)}")
        return error_response("존재하지 않는 게시글입니다.", 409)

    except Exception as e:
        current_app.logger.error(f"댓글 작성 실패: {str(e)}", exc_info=True)
        return error_response("댓글 작성에 실패했습니다.", 500)

    finally:
        if cursor:
            cursor.close()
        if conn:
            conn.close()

    notify_new_comment(post_id, author, content)

    return created(comment_id)


def notify_new_comment(post_id, author, content):
    """
    새 댓글 알림 (commit 이후 best-effort)

    게시글이 그 사이 삭제되었거나 조회/전송에 실패하면
    로그만 남기고 알림을 건너뜁니다.

    Returns:
        int: 전송 큐에 들어간 연결 수 (건너뛴 경우 0)
    """
    hub = current_app.extensions['notification_hub']
    conn = None
    cursor = None

    try:
        conn = get_db_connection()
        cursor = conn.cursor()
        cursor.execute("SELECT title FROM posts WHERE id = ?", (post_id,))
        post = cursor.fetchone()

        if post is None:
            current_app.logger.info(f"알림 생략: 게시글 없음 | Post: {post_id}")
            return 0

        return hub.broadcast(build_comment_event(post_id, post['title'], author, content))

    except Exception as e:
        current_app.logger.warning(f"댓글 알림 실패 | Post: {post_id} | {str(e)}")
        return 0

    finally:
        if cursor:
            cursor.close()
        if conn:
            conn.close()
