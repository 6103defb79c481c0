"""
로그 로테이션 및 레벨 설정

이 모듈은 Flask 앱의 로깅을 설정하며,
개발/프로덕션 환경에 따라 자동으로 로그 레벨을 전환합니다.
"""

import os
import logging
from logging.handlers import RotatingFileHandler


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(app):
    """
    Flask 앱 로깅 설정

    Args:
        app (Flask): Flask 앱 객체

    Note:
        - 개발 환경 (DEBUG=True): DEBUG 레벨
        - 프로덕션/테스트 환경: INFO 레벨
        - 로그 로테이션: 10MB × 5개 백업
        - 로그 파일: <LOG_DIR>/error.log
        - 이전에 붙인 RotatingFileHandler는 닫고 교체

    Example:
        >>> from flask import Flask
        >>> app = Flask(__name__)
        >>> setup_logging(app)
        >>> app.logger.info("Schedule 3 created")  # INFO 레벨 기록
    """
    log_dir = app.config.get('LOG_DIR', 'logs')
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, 'error.log')

    # 환경 설정으로 로그 레벨 자동 전환
    if app.config.get('DEBUG'):
        log_level = logging.DEBUG
        app.logger.info("🔧 Development mode: DEBUG logging enabled")
    else:
        log_level = logging.INFO
        app.logger.info("🚀 Production mode: INFO logging enabled")

    # RotatingFileHandler 설정
    # 10MB 초과 시 자동으로 error.log.1, error.log.2... 생성
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,              # 최대 5개 백업 파일
        encoding='utf-8',
        delay=True
    )

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')
    file_handler.setFormatter(formatter)
    file_handler.setLevel(log_level)

    # create_app을 여러 번 호출해도 파일 핸들러는 하나만 유지
    for handler in list(app.logger.handlers):
        if isinstance(handler, RotatingFileHandler):
            app.logger.removeHandler(handler)
            handler.close()

    app.logger.addHandler(file_handler)
    app.logger.setLevel(log_level)

    app.logger.info('=' * 50)
    app.logger.info('Guild Site Backend Starting')
    app.logger.info(f'Log level: {logging.getLevelName(log_level)}')
    app.logger.info(f'Log file: {log_file}')
    app.logger.info('=' * 50)


def log_api_call(app, endpoint, params=None):
    """
    API 호출 로그 기록 (감사 로그)

    Args:
        app (Flask): Flask 앱 객체
        endpoint (str): API 엔드포인트 (예: "POST /api/raid-schedules")
        params (dict, optional): 추가 파라미터

    Example:
        >>> log_api_call(app, "POST /api/raid-schedules", {"raid_name": "카멘"})
        # 로그: INFO - API Call: POST /api/raid-schedules | Params: {...}
    """
    log_msg = f"API Call: {endpoint}"
    if params:
        log_msg += f" | Params: {params}"
    app.logger.info(log_msg)


def log_admin_action(app, action, details=None):
    """
    삭제/권한 변경 등 관리 액션 로그 기록

    Args:
        app (Flask): Flask 앱 객체
        action (str): 액션 종류 (예: "DELETE_SCHEDULE")
        details (dict, optional): 상세 정보

    Example:
        >>> log_admin_action(app, "DELETE_SCHEDULE", {"schedule_id": 50})
        # 로그: INFO - Admin Action: DELETE_SCHEDULE | Details: {...}
    """
    log_msg = f"Admin Action: {action}"
    if details:
        log_msg += f" | Details: {details}"
    app.logger.info(log_msg)
