"""
레이드 일정/참가자 관리

이 모듈은 레이드 일정(raid_schedules)과 참가자 명단(raid_participants)의
생성/조회/삭제를 담당합니다.

- max_participants는 표시용 정원입니다 (참가자 추가 시 검사하지 않음)
- 일정 삭제 시 참가자는 DB의 ON DELETE CASCADE로 함께 삭제됩니다
"""

from utils.db import get_db_connection


DEFAULT_MAX_PARTICIPANTS = 8

PARTICIPANT_FIELDS = ('character_name', 'position', 'item_level', 'class_name', 'synergy')


def list_schedules():
    """
    전체 레이드 일정 + 참가자 명단 조회

    Returns:
        list: 일정 dict 리스트 (date, time 오름차순, 같으면 등록순)
            각 일정에 'participants' 리스트 포함 (저장 순서)

    Example:
        >>> list_schedules()
        [{'id': 1, 'raid_name': '카멘', 'date': '2024-06-01', 'time': '21:00',
          'difficulty': '하드', 'max_participants': 8, 'created_at': '...',
          'participants': [{'id': 3, 'schedule_id': 1, 'character_name': '...', ...}]}]
    """
    conn = get_db_connection()
    cursor = conn.cursor()

    try:
        cursor.execute("""
            SELECT * FROM raid_schedules
            ORDER BY date ASC, time ASC, id ASC
        """)
        schedules = [dict(row) for row in cursor.fetchall()]

        for schedule in schedules:
            cursor.execute(
                "SELECT * FROM raid_participants WHERE schedule_id = ?",
                (schedule['id'],)
            )
            schedule['participants'] = [dict(row) for row in cursor.fetchall()]

        return schedules
    finally:
        cursor.close()
        conn.close()


def create_schedule(raid_name, date, time, difficulty, max_participants=None):
    """
    레이드 일정 등록

    Args:
        raid_name (str): 레이드 이름 (예: "카멘")
        date (str): 날짜 문자열 (검증 없이 그대로 저장, 예: "2024-06-01")
        time (str): 시간 문자열 (예: "21:00")
        difficulty (str): 난이도 (예: "하드")
        max_participants (int, optional): 정원 (없거나 0이면 8)

    Returns:
        int: 생성된 schedule_id
    """
    conn = get_db_connection()
    cursor = conn.cursor()

    try:
        cursor.execute("""
            INSERT INTO raid_schedules (raid_name, date, time, difficulty, max_participants)
            VALUES (?, ?, ?, ?, ?)
        """, (raid_name, date, time, difficulty, max_participants or DEFAULT_MAX_PARTICIPANTS))
        conn.commit()
        return cursor.lastrowid
    finally:
        cursor.close()
        conn.close()


def delete_schedule(schedule_id):
    """
    레이드 일정 삭제 (참가자는 CASCADE로 함께 삭제)

    Returns:
        bool: 삭제된 일정이 있으면 True
    """
    conn = get_db_connection()
    cursor = conn.cursor()

    try:
        cursor.execute("DELETE FROM raid_schedules WHERE id = ?", (schedule_id,))
        conn.commit()
        return cursor.rowcount > 0
    finally:
        cursor.close()
        conn.close()


def add_participant(schedule_id, character_name, position, item_level, class_name, synergy):
    """
    참가자 추가

    중복 이름/포지션, 정원 초과를 검사하지 않습니다.

    Returns:
        int: 생성된 participant_id

    Raises:
        sqlite3.IntegrityError: 존재하지 않는 schedule_id인 경우 (외래 키 위반)
    """
    conn = get_db_connection()
    cursor = conn.cursor()

    try:
        cursor.execute("""
            INSERT INTO raid_participants
            (schedule_id, character_name, position, item_level, class_name, synergy)
            VALUES (?, ?, ?, ?, ?, ?)
        """, (schedule_id, character_name, position, item_level, class_name, synergy))
        conn.commit()
        return cursor.lastrowid
    finally:
        cursor.close()
        conn.close()


def remove_participant(participant_id):
    """
    참가자 한 명 삭제 (일정에는 영향 없음)

    Returns:
        bool: 삭제된 참가자가 있으면 True
    """
    conn = get_db_connection()
    cursor = conn.cursor()

    try:
        cursor.execute("DELETE FROM raid_participants WHERE id = ?", (participant_id,))
        conn.commit()
        return cursor.rowcount > 0
    finally:
        cursor.close()
        conn.close()
