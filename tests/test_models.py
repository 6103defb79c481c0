"""설정 모델 (타입 접근자 + 저장용 문자열 변환)"""

from models import SiteSettings, to_setting_value
from utils.db import DEFAULT_GRADE_NAMES, set_settings


def test_to_setting_value():
    assert to_setting_value('#8B5CF6') == '#8B5CF6'
    assert to_setting_value(["신입", "마스터"]) == '["신입", "마스터"]'
    assert to_setting_value({'id': 1}) == '{"id": 1}'
    assert to_setting_value(True) == 'true'
    assert to_setting_value(None) == 'null'
    assert to_setting_value(8) == '8'


def test_typed_accessors_over_seeded_settings(app):
    settings = SiteSettings.load()

    assert settings.guild_name == '로스트아크 INXX'
    assert settings.primary_color == '#8B5CF6'
    assert settings.grade_names == DEFAULT_GRADE_NAMES
    assert settings.raid_info == []
    assert settings.classes_info == []
    assert [boss['name'] for boss in settings.bosses_info][:2] == ['카멘', '에키드나']


def test_malformed_json_falls_back(app):
    set_settings({'grade_names': 'not json', 'guardians_info': '{"a": 1}'})

    settings = SiteSettings.load()
    assert settings.grade_names == DEFAULT_GRADE_NAMES
    assert settings.guardians_info == []


def test_mapping_exposes_raw_strings():
    settings = SiteSettings({'raid_info': '[1, 2]', 'custom': 'x'})

    assert dict(settings) == {'raid_info': '[1, 2]', 'custom': 'x'}
    assert settings.raid_info == [1, 2]
    assert settings.json_list('missing') == []
    assert len(settings) == 2
