"""로깅 설정"""

import os
from logging.handlers import RotatingFileHandler

from app import create_app


def file_handlers(app):
    return [h for h in app.logger.handlers if isinstance(h, RotatingFileHandler)]


def test_repeated_create_app_keeps_one_file_handler(tmp_path):
    create_app('testing', {
        'DB_PATH': str(tmp_path / 'first.db'),
        'LOG_DIR': str(tmp_path / 'first_logs'),
    })
    app = create_app('testing', {
        'DB_PATH': str(tmp_path / 'second.db'),
        'LOG_DIR': str(tmp_path / 'second_logs'),
    })

    [handler] = file_handlers(app)
    assert handler.baseFilename == os.path.abspath(str(tmp_path / 'second_logs' / 'error.log'))


def test_app_logs_to_error_log(app):
    app.logger.warning("길드 로그 기록")

    [handler] = file_handlers(app)
    handler.flush()
    with open(handler.baseFilename, encoding='utf-8') as f:
        assert "길드 로그 기록" in f.read()
