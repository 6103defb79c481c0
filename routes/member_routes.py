"""
길드원 라우트

- GET    /api/members: 길드원 목록 (가입순)
- PATCH  /api/members/<id>: 등급/권한 부분 수정
- DELETE /api/members/<id>: 길드원 삭제
- POST   /api/login: 닉네임으로 로그인 (없으면 프로필 생성)

권한 플래그는 저장/조회만 하며, 요청자 권한 검사는 하지 않습니다.
"""

import uuid

from flask import Blueprint, jsonify, current_app
from utils.db import get_db_connection
from utils.logging_setup import log_api_call, log_admin_action
from utils.responses import success, error_response
from utils.validators import (
    PERMISSION_FLAGS,
    ValidationError,
    get_json_object,
    require_fields,
    normalize_flag
)

bp = Blueprint('members', __name__)


@bp.route('/api/members', methods=['GET'])
def list_members():
    """길드원 목록 (created_at 오름차순)"""
    conn = None
    cursor = None

    try:
        conn = get_db_connection()
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM profiles ORDER BY created_at ASC, rowid ASC")
        return jsonify([dict(row) for row in cursor.fetchall()])

    except Exception as e:
        current_app.logger.error(f"길드원 조회 실패: {str(e)}", exc_info=True)
        return error_response("길드원 조회에 실패했습니다.", 500)

    finally:
        if cursor:
            cursor.close()
        if conn:
            conn.close()


@bp.route('/api/members/<member_id>', methods=['PATCH'])
def update_member(member_id):
    """
    등급/권한 수정 API

    Body (모두 선택, 없는 필드는 변경하지 않음):
    - grade: "길드원"
    - can_manage_members / can_manage_content / can_manage_settings: true/false 또는 1/0
    """
    conn = None
    cursor = None

    try:
        data = get_json_object()
        grade = data.get('grade')
        if grade is not None and not isinstance(grade, str):
            raise ValidationError("등급은 문자열이어야 합니다.")
        flags = [normalize_flag(data.get(flag)) for flag in PERMISSION_FLAGS]

        log_admin_action(current_app, "UPDATE_MEMBER", {'member_id': member_id, **data})

        conn = get_db_connection()
        cursor = conn.cursor()
        cursor.execute("""
            UPDATE profiles
            SET grade = COALESCE(?, grade),
                can_manage_members = COALESCE(?, can_manage_members),
                can_manage_content = COALESCE(?, can_manage_content),
                can_manage_settings = COALESCE(?, can_manage_settings)
            WHERE id = ?
        """, (grade, *flags, member_id))
        conn.commit()

        return success()

    except ValidationError as e:
        current_app.logger.warning(f"길드원 수정 입력 에러: {str(e)}")
        return error_response(str(e), 400)

    except Exception as e:
        current_app.logger.error(f"길드원 수정 실패: {str(e)}", exc_info=True)
        return error_response("길드원 수정에 실패했습니다.", 500)

    finally:
        if cursor:
            cursor.close()
        if conn:
            conn.close()


@bp.route('/api/members/<member_id>', methods=['DELETE'])
def delete_member(member_id):
    """길드원 삭제"""
    conn = None
    cursor = None

    try:
        conn = get_db_connection()
        cursor = conn.cursor()
        cursor.execute("DELETE FROM profiles WHERE id = ?", (member_id,))
        conn.commit()

        log_admin_action(current_app, "DELETE_MEMBER", {'member_id': member_id, 'deleted': cursor.rowcount})
        return success()

    except Exception as e:
        current_app.logger.error(f"길드원 삭제 실패: {str(e)}", exc_info=True)
        return error_response("길드원 삭제에 실패했습니다.", 500)

    finally:
        if cursor:
            cursor.close()
        if conn:
            conn.close()


@bp.route('/api/login', methods=['POST'])
def login():
    """
    닉네임 로그인 API

    첫 로그인:
    - 새 프로필 생성 (등급 '신입', 권한 모두 0)

    기존 닉네임:
    - 기존 프로필 그대로 반환
    """
    conn = None
    cursor = None

    try:
        data = get_json_object()
        nickname = require_fields(data, ['nickname'])['nickname']
        if not isinstance(nickname, str):
            raise ValidationError("닉네임은 문자열이어야 합니다.")
        nickname = nickname.strip()

        log_api_call(current_app, "POST /api/login", {'nickname': nickname})

        conn = get_db_connection()
        cursor = conn.cursor()

        # nickname UNIQUE 인덱스: 동시 첫 로그인도 한 행만 생성
        profile_id = uuid.uuid4().hex[:12]
        cursor.execute(
            "INSERT OR IGNORE INTO profiles (id, nickname) VALUES (?, ?)",
            (profile_id, nickname)
        )
        conn.commit()

        if cursor.rowcount == 1:
            current_app.logger.info(f"신규 길드원 등록: {profile_id} ({nickname})")

        cursor.execute("SELECT * FROM profiles WHERE nickname = ?", (nickname,))
        profile = cursor.fetchone()
        if profile is None:
            raise RuntimeError(f"프로필 생성 실패: {nickname}")

        return jsonify(dict(profile))

    except ValidationError as e:
        current_app.logger.warning(f"로그인 입력 에러: {str(e)}")
        return error_response(str(e), 400)

    except Exception as e:
        current_app.logger.error(f"로그인 실패: {str(e)}", exc_info=True)
        return error_response("로그인에 실패했습니다.", 500)

    finally:
        if cursor:
            cursor.close()
        if conn:
            conn.close()
