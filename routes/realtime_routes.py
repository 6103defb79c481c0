"""
실시간 알림 WebSocket 엔드포인트

HTTP와 같은 포트의 루트 경로(/)에서 WebSocket 업그레이드를 받습니다.
클라이언트는 메시지를 보내지 않고, 서버가 보내는 JSON 텍스트 프레임만 수신합니다.

    ws://<host>/  →  {"type": "NEW_COMMENT", "postId": 1, ...}
"""

from flask import current_app
from flask_sock import Sock

sock = Sock()


@sock.route('/')
def notifications(ws):
    """연결 종료(ConnectionClosed)는 flask-sock이 처리합니다."""
    serve_connection(current_app.extensions['notification_hub'], ws)


def serve_connection(hub, ws):
    """
    연결 등록 → 연결이 끊길 때까지 대기 → 연결 해제

    Args:
        hub (NotificationHub): 앱에 주입된 알림 허브
        ws: flask-sock Server 객체
    """
    hub.register(ws)

    try:
        while True:
            ws.receive()
    finally:
        hub.unregister(ws)
