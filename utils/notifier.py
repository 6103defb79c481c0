"""
실시간 알림 허브

WebSocket 연결 목록을 관리하고, 새 댓글 알림을 연결된 모든 클라이언트에 전송합니다.

- 연결 등록/해제: WebSocket 핸들러 (routes/realtime_routes.py)
- 브로드캐스트: 댓글 작성 라우트 (routes/post_routes.py)

두 경로가 서로 다른 요청 스레드에서 동시에 호출되므로
연결 목록은 Lock으로 보호하고, 전송은 연결별 큐에 넣어 writer 스레드가 처리합니다.
"""

import json
import logging
import queue
import threading


logger = logging.getLogger(__name__)

NEW_COMMENT = 'NEW_COMMENT'
PREVIEW_LENGTH = 20
ELLIPSIS = '...'
OUTBOX_SIZE = 100

_STOP = object()


def comment_preview(content, limit=PREVIEW_LENGTH):
    """
    댓글 미리보기 문자열 생성

    Example:
        >>> comment_preview("Hello world, this is long")
        'Hello world, this is...'
        >>> comment_preview("짧은 댓글")
        '짧은 댓글'
    """
    if len(content) > limit:
        return content[:limit] + ELLIPSIS
    return content


def build_comment_event(post_id, post_title, author, content):
    """
    NEW_COMMENT 이벤트 생성

    Returns:
        dict: {
            'type': 'NEW_COMMENT',
            'postId': int,
            'postTitle': str,
            'author': str,
            'content': str (20자 초과 시 잘라서 '...' 추가)
        }
    """
    return {
        'type': NEW_COMMENT,
        'postId': post_id,
        'postTitle': post_title,
        'author': author,
        'content': comment_preview(content),
    }


class Outbox:
    """
    연결별 전송 큐 + writer 스레드

    브로드캐스트는 큐에 넣기만 하고, 실제 ws.send()는 writer 스레드가 수행합니다.
    수신을 멈춘 클라이언트 때문에 send가 막혀도 요청 스레드는 기다리지 않습니다.
    """

    def __init__(self, ws, on_failure, size):
        self.ws = ws
        self.queue = queue.Queue(maxsize=size)
        self.closed = threading.Event()
        self._on_failure = on_failure
        self.thread = threading.Thread(target=self._run, name='ws-writer', daemon=True)
        self.thread.start()

    def offer(self, message):
        """큐가 가득 차 있으면 버리고 False"""
        try:
            self.queue.put_nowait(message)
            return True
        except queue.Full:
            return False

    def close(self):
        self.closed.set()
        try:
            self.queue.put_nowait(_STOP)
        except queue.Full:
            # writer가 다음 메시지를 꺼낼 때 closed를 보고 종료
            pass

    def _run(self):
        while not self.closed.is_set():
            message = self.queue.get()
            if message is _STOP or self.closed.is_set():
                break
            try:
                self.ws.send(message)
            except Exception as e:
                self._on_failure(self.ws, e)
                break


class NotificationHub:
    """
    WebSocket 연결 레지스트리 + 브로드캐스트

    연결 객체는 `connected` 속성과 `send(text)` 메서드를 가져야 합니다.
    (flask-sock / simple-websocket의 Server 객체)

    Args:
        log (logging.Logger, optional): 로거 (기본: 모듈 로거)
        outbox_size (int): 연결별 대기 메시지 최대 개수 (초과분은 버림)
    """

    def __init__(self, log=None, outbox_size=OUTBOX_SIZE):
        self._outboxes = {}
        self._lock = threading.Lock()
        self.logger = log or logger
        self.outbox_size = outbox_size

    def register(self, ws):
        with self._lock:
            if ws not in self._outboxes:
                self._outboxes[ws] = Outbox(ws, self._drop, self.outbox_size)
            total = len(self._outboxes)
        self.logger.info(f"WebSocket connected | Total: {total}")

    def unregister(self, ws):
        with self._lock:
            outbox = self._outboxes.pop(ws, None)
            total = len(self._outboxes)
        if outbox:
            outbox.close()
        self.logger.info(f"WebSocket disconnected | Total: {total}")

    def _drop(self, ws, error):
        self.logger.debug(f"Broadcast send failed, dropping connection: {error}")
        self.unregister(ws)

    def snapshot(self):
        """현재 연결 목록 복사본"""
        with self._lock:
            return list(self._outboxes)

    def __len__(self):
        with self._lock:
            return len(self._outboxes)

    def broadcast(self, event):
        """
        이벤트를 열린 연결 전체에 전송 (best-effort, 블로킹 없음)

        Args:
            event (dict): JSON 직렬화 가능한 이벤트

        Returns:
            int: 전송 큐에 들어간 연결 수

        Note:
            - 닫히는 중/닫힌 연결은 건너뜀 (재시도 없음)
            - 전송 큐가 가득 찬 연결은 이번 메시지를 버림
            - 전송 실패한 연결은 writer 스레드가 목록에서 제거
        """
        message = json.dumps(event, ensure_ascii=False)

        with self._lock:
            outboxes = list(self._outboxes.values())

        queued = 0
        for outbox in outboxes:
            if not getattr(outbox.ws, 'connected', False):
                continue
            if outbox.offer(message):
                queued += 1
            else:
                self.logger.debug("Outbox full, message dropped")

        self.logger.debug(f"Broadcast {event.get('type')} | Queued: {queued}")
        return queued
