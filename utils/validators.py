"""
요청 데이터 검증 로직

이 모듈은 DB에 쓰기 전에 필수 필드 누락, 잘못된 JSON 형식 등을 검사합니다.
검증 실패 시 ValidationError를 발생시키고, 라우트에서 400으로 응답합니다.
"""

from flask import request


PERMISSION_FLAGS = ('can_manage_members', 'can_manage_content', 'can_manage_settings')


class ValidationError(ValueError):
    """입력 형식 오류 (400)"""


def get_json_object():
    """
    요청 본문을 JSON 객체(dict)로 읽기

    Returns:
        dict: 요청 본문

    Raises:
        ValidationError: 본문이 없거나 JSON 객체가 아닌 경우
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("요청 본문은 JSON 객체여야 합니다.")
    return data


def require_fields(data, fields):
    """
    필수 필드 검증

    None, 빈 문자열은 누락으로 처리합니다. (0은 허용)

    Args:
        data (dict): 요청 본문
        fields (iterable): 필수 필드 이름 목록

    Returns:
        dict: {필드: 값} (fields 순서)

    Raises:
        ValidationError: 누락된 필드가 있거나 값이 객체/배열인 경우

    Example:
        >>> require_fields({'nickname': '채희'}, ['nickname'])
        {'nickname': '채희'}

        >>> require_fields({'nickname': ''}, ['nickname'])
        ValidationError: 필수 정보가 누락되었습니다: nickname
    """
    missing = [
        field for field in fields
        if data.get(field) is None or (isinstance(data.get(field), str) and not data.get(field).strip())
    ]
    if missing:
        raise ValidationError(f"필수 정보가 누락되었습니다: {', '.join(missing)}")

    for field in fields:
        check_scalar(field, data[field])

    return {field: data[field] for field in fields}


def check_scalar(field, value):
    """
    단일 값(문자열/숫자/bool) 검증

    JSON 객체나 배열은 DB 컬럼에 저장할 수 없으므로 거부합니다.

    Raises:
        ValidationError: dict/list 값인 경우
    """
    if isinstance(value, (dict, list)):
        raise ValidationError(f"{field} 값 형식이 올바르지 않습니다.")
    return value


def optional_field(data, field, default=None):
    """
    선택 필드 읽기 (없거나 빈 값이면 default)

    Example:
        >>> optional_field({'author': 'X'}, 'author', '길드원')
        'X'
        >>> optional_field({}, 'author', '길드원')
        '길드원'
    """
    value = data.get(field)
    if value is None or value == '':
        return default
    return check_scalar(field, value)


def normalize_flag(value):
    """
    권한 플래그 정규화 (None은 '변경 없음'으로 유지)

    Example:
        >>> normalize_flag(True)
        1
        >>> normalize_flag(0)
        0
        >>> normalize_flag(None) is None
        True
    """
    if value is None:
        return None
    if isinstance(value, (dict, list)):
        raise ValidationError(f"권한 값이 올바르지 않습니다: {value}")
    if isinstance(value, str):
        if value.strip().lower() in ('1', 'true', 'yes', 'on'):
            return 1
        if value.strip().lower() in ('0', 'false', 'no', 'off', ''):
            return 0
        raise ValidationError(f"권한 값이 올바르지 않습니다: {value}")
    return 1 if value else 0
