"""
사이트 설정 라우트

- GET  /api/settings: 전체 설정 {key: value}
- POST /api/settings: 전달된 키만 upsert (나머지 키는 유지)
"""

from flask import Blueprint, jsonify, current_app
from models import SiteSettings, to_setting_value
from utils.db import set_settings
from utils.logging_setup import log_admin_action
from utils.responses import success, error_response
from utils.validators import ValidationError, get_json_object

bp = Blueprint('settings', __name__)


@bp.route('/api/settings', methods=['GET'])
def get_settings():
    """전체 설정 조회"""
    try:
        return jsonify(dict(SiteSettings.load()))

    except Exception as e:
        current_app.logger.error(f"설정 조회 실패: {str(e)}", exc_info=True)
        return error_response("설정 조회에 실패했습니다.", 500)


@bp.route('/api/settings', methods=['POST'])
def update_settings():
    """
    설정 저장 API

    Body: {key: value, ...}
    - 문자열은 그대로, list/dict는 JSON 문자열로 저장
    """
    try:
        data = get_json_object()
        values = {str(key): to_setting_value(value) for key, value in data.items()}

        set_settings(values)

        log_admin_action(current_app, "UPDATE_SETTINGS", {'keys': sorted(values)})
        return success()

    except ValidationError as e:
        current_app.logger.warning(f"설정 입력 에러: {str(e)}")
        return error_response(str(e), 400)

    except Exception as e:
        current_app.logger.error(f"설정 저장 실패: {str(e)}", exc_info=True)
        return error_response("설정 저장에 실패했습니다.", 500)
