from withroom.models import Study
from withroom.rendering import (render_study_list, layout_mode, sanitize_introduction,
                                LOADING, ERROR, EMPTY, CARDS, MOBILE, DESKTOP)
from withroom.tabs import REQUEST_JOIN

from conftest import study_json


def _studies(*ids, **overrides):
    return [Study.from_json(study_json(i, **overrides)) for i in ids]


def test_loading_wins_over_everything():
    tree = render_study_list(True, '에러', _studies(1), '없음')
    assert tree.kind == LOADING
    assert tree.cards == []


def test_error_wins_over_empty():
    tree = render_study_list(False, '스터디 목록을 불러오는데 실패했습니다.', [], '관심 스터디가 없습니다.')
    assert tree.kind == ERROR
    assert tree.message == '스터디 목록을 불러오는데 실패했습니다.'


def test_empty_message():
    tree = render_study_list(False, None, [], '관심 스터디가 없습니다.')
    assert tree.kind == EMPTY
    assert tree.message == '관심 스터디가 없습니다.'


def test_cards_keyed_by_study_id():
    tree = render_study_list(False, None, _studies(3, 1, 2), '없음')
    assert tree.kind == CARDS
    assert tree.keys == [3, 1, 2]


def test_closed_study_disables_join():
    study = Study.from_json(study_json(1, nowPeople=4, recruitPeople=4))
    card = render_study_list(False, None, [study], '없음').cards[0]
    assert card.closed
    assert not card.join_enabled
    assert card.join_label == '마감됨'
    assert study.recruitment_text == '마감됨'


def test_open_study_can_join():
    card = render_study_list(False, None, _studies(1), '없음').cards[0]
    assert not card.closed
    assert card.join_enabled
    assert card.study.recruitment_text == '1/4'


def test_response_buttons_only_in_request_join_tab():
    tree = render_study_list(False, None, _studies(1), '없음', card_type=REQUEST_JOIN)
    assert tree.cards[0].show_response_buttons
    tree = render_study_list(False, None, _studies(1), '없음', card_type='created')
    assert not tree.cards[0].show_response_buttons


def test_layout_mode():
    assert layout_mode('Mozilla/5.0 (iPhone) Mobile/15E148') == MOBILE
    assert layout_mode('Mozilla/5.0 (Windows NT 10.0)') == DESKTOP
    assert layout_mode('Mozilla/5.0 (iPhone) Mobile', override=DESKTOP) == DESKTOP
    assert render_study_list(False, None, _studies(1), '', layout=MOBILE).columns == 1


def test_sanitize_introduction_strips_tags():
    html = '<p>안녕하세요</p><script>alert(1)</script><p>파이썬 &amp; 장고</p>'
    text = sanitize_introduction(html)
    assert '<' not in text
    assert '안녕하세요' in text
    assert '파이썬 & 장고' in text


def test_tags_are_split():
    study = Study.from_json(study_json(1, topic='파이썬, 알고리즘 ,  '))
    assert study.tags == ['파이썬', '알고리즘']
