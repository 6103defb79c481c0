"""
사이트 설정 모델

settings 테이블은 key-value 문자열 저장소입니다.
일부 값(grade_names, bosses_info 등)은 JSON 문자열이므로,
원본 문자열 위에 타입이 있는 접근자를 제공합니다.
"""

import json
from collections.abc import Mapping

from utils.db import DEFAULT_GRADE_NAMES, DEFAULT_SETTINGS, get_settings


def to_setting_value(value):
    """
    설정 값을 저장용 문자열로 변환

    Args:
        value: 클라이언트가 보낸 값 (문자열, 숫자, bool, list, dict, None)

    Returns:
        str: 저장할 문자열

    Example:
        >>> to_setting_value('#8B5CF6')
        '#8B5CF6'
        >>> to_setting_value(["신입", "마스터"])
        '["신입", "마스터"]'
        >>> to_setting_value(True)
        'true'
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (list, dict, bool)) or value is None:
        return json.dumps(value, ensure_ascii=False)
    return str(value)


class SiteSettings(Mapping):
    """
    설정 매핑 (읽기 전용)

    Attributes:
        guild_name (str): 길드 이름
        guild_description (str): 길드 소개
        primary_color (str): 테마 색상 (#RRGGBB)
        grade_names (list): 등급 이름 목록 (낮은 등급부터)
        raid_info / guardians_info / classes_info / bosses_info (list): JSON 카탈로그
    """

    def __init__(self, values):
        self._values = dict(values)

    @classmethod
    def load(cls, db_path=None):
        """DB에서 전체 설정을 읽어 SiteSettings 생성"""
        return cls(get_settings(db_path))

    def __getitem__(self, key):
        return self._values[key]

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def json_list(self, key, default=None):
        """
        JSON 배열 설정 값 파싱

        키가 없거나 JSON이 깨졌거나 배열이 아니면 default(기본 [])를 반환합니다.
        """
        fallback = [] if default is None else list(default)
        raw = self._values.get(key)
        if raw is None:
            return fallback
        try:
            parsed = json.loads(raw)
        except (TypeError, ValueError):
            return fallback
        return parsed if isinstance(parsed, list) else fallback

    @property
    def guild_name(self):
        return self._values.get('guild_name', DEFAULT_SETTINGS['guild_name'])

    @property
    def guild_description(self):
        return self._values.get('guild_description', DEFAULT_SETTINGS['guild_description'])

    @property
    def primary_color(self):
        return self._values.get('primary_color', DEFAULT_SETTINGS['primary_color'])

    @property
    def grade_names(self):
        return self.json_list('grade_names', DEFAULT_GRADE_NAMES)

    @property
    def raid_info(self):
        return self.json_list('raid_info')

    @property
    def guardians_info(self):
        return self.json_list('guardians_info')

    @property
    def classes_info(self):
        return self.json_list('classes_info')

    @property
    def bosses_info(self):
        return self.json_list('bosses_info')
