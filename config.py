"""Flask 앱 설정"""
import os
from dotenv import load_dotenv

# .env 파일 로드
load_dotenv()


class Config:
    """기본 설정 클래스"""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key'
    DB_PATH = os.environ.get('DB_PATH', 'guild.db')
    DB_TIMEOUT = float(os.environ.get('DB_TIMEOUT', 5))
    LOG_DIR = os.environ.get('LOG_DIR', 'logs')
    FLASK_ENV = os.environ.get('FLASK_ENV', 'production')
    DEBUG = (FLASK_ENV == 'development')
    TESTING = False

    # 게시글 테이블이 비어 있을 때만 기본 공지글 등록
    SEED_DEFAULT_POSTS = os.environ.get('SEED_DEFAULT_POSTS', '1') == '1'

    # flask-sock: 25초마다 ping (프록시 idle timeout 방지)
    SOCK_SERVER_OPTIONS = {'ping_interval': 25}

    @staticmethod
    def init_app(app):
        """앱 초기화 시 실행되는 설정"""
        pass


class DevelopmentConfig(Config):
    """개발 환경 설정"""
    DEBUG = True


class ProductionConfig(Config):
    """프로덕션 환경 설정"""
    DEBUG = False


class TestingConfig(Config):
    """테스트 환경 설정 (DB_PATH, LOG_DIR은 테스트에서 덮어씀)"""
    TESTING = True
    DEBUG = False
    SEED_DEFAULT_POSTS = False
    SOCK_SERVER_OPTIONS = {'ping_interval': None}


# 환경별 설정 매핑
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': ProductionConfig
}
