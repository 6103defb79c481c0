"""
레이드 일정 라우트

- GET    /api/raid-schedules: 일정 목록 (날짜/시간순, 참가자 포함)
- POST   /api/raid-schedules: 일정 등록
- DELETE /api/raid-schedules/<id>: 일정 삭제 (참가자 CASCADE)
- POST   /api/raid-schedules/<id>/participants: 참가자 추가
- DELETE /api/raid-participants/<id>: 참가자 삭제
"""

import sqlite3

from flask import Blueprint, jsonify, current_app
from utils import roster
from utils.logging_setup import log_api_call, log_admin_action
from utils.responses import success, created, error_response
from utils.validators import ValidationError, get_json_object, require_fields

bp = Blueprint('raids', __name__)

SCHEDULE_FIELDS = ('raid_name', 'date', 'time', 'difficulty')


@bp.route('/api/raid-schedules', methods=['GET'])
def list_schedules():
    """레이드 일정 목록"""
    try:
        return jsonify(roster.list_schedules())

    except Exception as e:
        current_app.logger.error(f"일정 조회 실패: {str(e)}", exc_info=True)
        return error_response("일정 조회에 실패했습니다.", 500)


@bp.route('/api/raid-schedules', methods=['POST'])
def create_schedule():
    """
    레이드 일정 등록 API

    Body:
    - raid_name: "카멘" (필수)
    - date: "2024-06-01" (필수)
    - time: "21:00" (필수)
    - difficulty: "하드" (필수)
    - max_participants: 8 (선택, 기본 8)
    """
    try:
        data = get_json_object()
        fields = require_fields(data, SCHEDULE_FIELDS)
        max_participants = data.get('max_participants')

        if max_participants not in (None, ''):
            try:
                max_participants = int(max_participants)
            except (TypeError, ValueError):
                raise ValidationError(f"정원은 숫자여야 합니다: {max_participants}")

        log_api_call(current_app, "POST /api/raid-schedules", {**fields, 'max_participants': max_participants})

        schedule_id = roster.create_schedule(max_participants=max_participants, **fields)

        current_app.logger.info(f"✅ 레이드 일정 등록 완료 | ID: {schedule_id}")
        return created(schedule_id)

    except ValidationError as e:
        current_app.logger.warning(f"일정 입력 에러: {str(e)}")
        return error_response(str(e), 400)

    except Exception as e:
        current_app.logger.error(f"❌ 일정 등록 실패: {str(e)}", exc_info=True)
        return error_response("일정 등록에 실패했습니다.", 500)


@bp.route('/api/raid-schedules/<int:schedule_id>', methods=['DELETE'])
def delete_schedule(schedule_id):
    """레이드 일정 삭제"""
    try:
        deleted = roster.delete_schedule(schedule_id)

        log_admin_action(current_app, "DELETE_SCHEDULE", {'schedule_id': schedule_id, 'deleted': deleted})
        return success()

    except Exception as e:
        current_app.logger.error(f"❌ 일정 삭제 실패: {str(e)}", exc_info=True)
        return error_response("일정 삭제에 실패했습니다.", 500)


@bp.route('/api/raid-schedules/<int:schedule_id>/participants', methods=['POST'])
def add_participant(schedule_id):
    """
    참가자 추가 API

    Body (모두 필수):
    - character_name, position, item_level, class_name, synergy

    정원(max_participants)을 넘어도 추가됩니다.
    """
    try:
        data = get_json_object()
        fields = require_fields(data, roster.PARTICIPANT_FIELDS)

        log_api_call(current_app, f"POST /api/raid-schedules/{schedule_id}/participants", fields)

        participant_id = roster.add_participant(schedule_id, **fields)
        return created(participant_id)

    except ValidationError as e:
        current_app.logger.warning(f"참가자 입력 에러: {str(e)}")
        return error_response(str(e), 400)

    except sqlite3.IntegrityError as e:
        # 존재하지 않는 일정 (외래 키 위반)
        current_app.logger.warning(f"참가자 추가 거부 | Schedule: {schedule_id} | {str(e)}")
        return error_response("존재하지 않는 일정입니다.", 409)

    except Exception as e:
        current_app.logger.error(f"❌ 참가자 추가 실패: {str(e)}", exc_info=True)
        return error_response("참가자 추가에 실패했습니다.", 500)


@bp.route('/api/raid-participants/<int:participant_id>', methods=['DELETE'])
def remove_participant(participant_id):
    """참가자 삭제"""
    try:
        deleted = roster.remove_participant(participant_id)

        log_admin_action(current_app, "REMOVE_PARTICIPANT", {'participant_id': participant_id, 'deleted': deleted})
        return success()

    except Exception as e:
        current_app.logger.error(f"❌ 참가자 삭제 실패: {str(e)}", exc_info=True)
        return error_response("참가자 삭제에 실패했습니다.", 500)
