"""
WSGI 진입점

gunicorn 등 WSGI 서버에서 참조합니다.
WebSocket(flask-sock)을 쓰므로 스레드 워커로 실행해야 합니다.

    gunicorn -b 0.0.0.0:3000 --threads 50 wsgi:application

로컬 개발에서는 `python app.py`를 사용합니다.
"""

import os

# 환경 변수는 .env 또는 배포 환경에서 설정
os.environ.setdefault('FLASK_ENV', 'production')

from app import create_app

# WSGI 서버는 'application' 이름을 찾습니다
application = create_app()
