"""
pytest 공통 fixture

- app: 임시 SQLite 파일 + 임시 로그 디렉토리로 생성한 테스트 앱
- client: Flask 테스트 클라이언트
- hub: 앱에 주입된 NotificationHub
- fake_socket: WebSocket 대용 객체 생성 함수
- wait_until: 비동기 전송(writer 스레드) 결과를 기다리는 함수
"""

import json
import time

import pytest

from app import create_app


class FakeSocket:
    """flask-sock Server 대용 (connected 속성 + send 메서드)"""

    def __init__(self, connected=True, fail=False):
        self.connected = connected
        self.fail = fail
        self.sent = []

    def send(self, data):
        if self.fail:
            raise ConnectionError("broken pipe")
        self.sent.append(data)

    def messages(self):
        return [json.loads(message) for message in self.sent]


@pytest.fixture
def app(tmp_path):
    app = create_app('testing', {
        'DB_PATH': str(tmp_path / 'guild.db'),
        'LOG_DIR': str(tmp_path / 'logs'),
    })
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def hub(app):
    return app.extensions['notification_hub']


@pytest.fixture
def fake_socket():
    return FakeSocket


@pytest.fixture
def wait_until():
    def wait(predicate, timeout=2.0):
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if predicate():
                return True
            time.sleep(0.01)
        return predicate()
    return wait
