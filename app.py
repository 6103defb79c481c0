"""
Flask 메인 애플리케이션

길드 커뮤니티 사이트(공지/댓글, 길드원, 설정, 레이드 일정)의 백엔드 서버입니다.
댓글이 작성되면 WebSocket으로 연결된 모든 클라이언트에 알림을 보냅니다.
"""

from flask import Flask
from werkzeug.exceptions import HTTPException
from config import config
from models import SiteSettings
from utils.db import init_schema
from utils.logging_setup import setup_logging
from utils.notifier import NotificationHub
from utils.responses import error_response
import utils.db as db_module
import os


def create_app(config_name=None, test_config=None):
    """
    Flask 앱 팩토리

    Args:
        config_name (str): 설정 이름 ('development', 'production', 'testing')
        test_config (dict, optional): 설정 덮어쓰기 (테스트용 DB_PATH, LOG_DIR 등)

    Returns:
        Flask: 설정된 Flask 앱 객체
    """
    app = Flask(__name__)

    # 환경 설정 로드
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    # 설정 적용
    app.config.from_object(config[config_name])
    if test_config:
        app.config.update(test_config)
    config[config_name].init_app(app)

    # 로깅 설정
    setup_logging(app)

    # DB 초기화 (테이블 생성 + 기본 데이터)
    try:
        db_module.database_path = app.config['DB_PATH']
        db_module.database_timeout = app.config['DB_TIMEOUT']
        init_schema(seed_posts=app.config['SEED_DEFAULT_POSTS'])
        app.logger.info(f"✅ SQLite store initialized: {app.config['DB_PATH']}")
    except Exception as e:
        app.logger.error(f"❌ Failed to initialize database: {e}")
        raise

    # 실시간 알림 허브 (WebSocket 핸들러와 댓글 라우트가 공유)
    app.extensions['notification_hub'] = NotificationHub(app.logger)

    # 라우트 등록
    from routes import post_routes, member_routes, settings_routes, raid_routes, realtime_routes

    app.register_blueprint(post_routes.bp)
    app.register_blueprint(member_routes.bp)
    app.register_blueprint(settings_routes.bp)
    app.register_blueprint(raid_routes.bp)
    realtime_routes.sock.init_app(app)

    app.logger.info("✅ All routes registered")

    # 헬스 체크 엔드포인트
    @app.route('/health')
    def health_check():
        """서버 상태 확인"""
        return {
            "status": "healthy",
            "service": "guild-site-backend",
            "version": "1.0.0",
            "guild_name": SiteSettings.load().guild_name,
            "websocket_clients": len(app.extensions['notification_hub'])
        }, 200

    # 에러 핸들러
    @app.errorhandler(Exception)
    def handle_error(e):
        """
        전역 에러 핸들러

        404/405 등 HTTP 에러는 상태 코드를 유지하고,
        그 외 모든 예외는 로그에 기록한 뒤 500으로 응답합니다.
        """
        if isinstance(e, HTTPException):
            return error_response(e.description, e.code)

        app.logger.error(f"Unhandled exception: {str(e)}", exc_info=True)
        return error_response("서버 에러가 발생했습니다. 잠시 후 다시 시도해주세요.", 500)

    return app


if __name__ == '__main__':
    # 로컬 개발 서버 실행 (개발 전용)
    # 프로덕션에서는 WSGI 서버 사용
    app = create_app()
    app.run(host='0.0.0.0', port=3000, debug=True)
