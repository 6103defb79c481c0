"""
JSON 응답 템플릿 함수

라우트마다 반복되는 응답 JSON 구조를 함수로 묶어둡니다.
"""

from flask import jsonify


def success():
    """
    처리 완료 응답

    Example:
        >>> success()
        {"success": true}
    """
    return jsonify({"success": True})


def created(new_id):
    """
    생성 완료 응답

    Args:
        new_id (int | str): 생성된 row의 id

    Example:
        >>> created(12)
        {"id": 12}
    """
    return jsonify({"id": new_id})


def error_response(message, status):
    """
    에러 응답

    Args:
        message (str): 사용자에게 표시할 메시지
        status (int): HTTP 상태 코드

    Returns:
        tuple: (Response, status)
    """
    return jsonify({"success": False, "error": message}), status
