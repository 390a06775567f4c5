import io

import pytest
import requests

from withroom.api import (AuthContext, StudyApiClient, study_list,
                          NETWORK_ERROR_MESSAGE, SERVER_ERROR_MESSAGE, MALFORMED_MESSAGE)
from withroom.errors import ApiError, AuthRequired, FetchError

from conftest import BASE_URL, FakeResponse, study_json


def _detail_json(**overrides):
    data = {
        'studyDetail': study_json(5, introduction='<p>소개</p>', tag='파이썬'),
        'studyGroupLeader': {'name': '방장', 'preferredArea': '서울'},
        'studyScheduleDetail': {'weekDay': '화, 목', 'startDay': '2024-01-01', 'endDay': '2024-02-01',
                                'time': '저녁', 'period': '1시간'},
        'studyCommentList': [{'commentId': 1, 'content': '안녕', 'nickName': '철수', 'anonymous': False}],
    }
    data.update(overrides)
    return data


def test_bearer_header_is_sent(api, fake_session):
    fake_session.add('GET', '/home/info', {'homeStudyInfoList': []})
    api.home_studies()
    assert fake_session.calls[0]['headers'] == {'Authorization': 'Bearer token-1'}


def test_missing_token_raises_before_request(fake_session):
    client = StudyApiClient(BASE_URL, AuthContext(), session=fake_session)
    with pytest.raises(AuthRequired):
        client.home_studies()
    assert fake_session.calls == []


def test_login_state_does_not_need_token(fake_session):
    fake_session.add('GET', '/oauth/login/state', {'state': True})
    client = StudyApiClient(BASE_URL, AuthContext(), session=fake_session)
    assert client.login_state() is True


def test_expired_token(api, fake_session):
    fake_session.add('GET', '/home/info', status=401)
    with pytest.raises(AuthRequired):
        api.home_studies()


def test_server_error(api, fake_session):
    fake_session.add('GET', '/home/info', status=500)
    with pytest.raises(ApiError) as exc:
        api.home_studies()
    assert exc.value.message == SERVER_ERROR_MESSAGE
    assert exc.value.status == 500


def test_network_error(api, fake_session):
    fake_session.fail('GET', '/home/info', requests.exceptions.Timeout('slow'))
    with pytest.raises(ApiError) as exc:
        api.home_studies()
    assert exc.value.message == NETWORK_ERROR_MESSAGE


def test_non_json_body(api, fake_session):
    fake_session.routes[('GET', '/home/info')] = FakeResponse(200, raw=b'<html>')
    with pytest.raises(ApiError) as exc:
        api.home_studies()
    assert exc.value.message == MALFORMED_MESSAGE


def test_boolean_endpoints_require_true(api, fake_session):
    fake_session.add('POST', '/study/join', 'true')
    assert api.join_study(1) is False
    fake_session.add('POST', '/study/join', True)
    assert api.join_study(1) is True


class TestStudyList:

    def test_missing_field_is_empty(self):
        assert study_list({}, 'homeStudyInfoList') == []
        assert study_list(None, 'homeStudyInfoList') == []

    def test_not_a_list(self):
        with pytest.raises(FetchError):
            study_list({'homeStudyInfoList': 'oops'}, 'homeStudyInfoList')

    def test_bad_item(self):
        with pytest.raises(FetchError):
            study_list({'homeStudyInfoList': [{'title': 'no id'}]}, 'homeStudyInfoList')

    def test_parses_items(self):
        studies = study_list({'homeStudyInfoList': [study_json(1), study_json(2)]}, 'homeStudyInfoList')
        assert [s.study_id for s in studies] == [1, 2]


def test_filter_and_title_search_params(api, fake_session):
    fake_session.add('GET', '/home/filter/info', {'homeStudyInfoList': [study_json(1)]})
    fake_session.add('GET', '/home/filter/title', {'homeStudyInfoList': []})
    api.filter_studies({'difficulty': '초급'})
    api.search_by_title('파이썬')
    assert fake_session.calls[0]['params'] == {'difficulty': '초급'}
    assert fake_session.calls[1]['params'] == {'title': '파이썬'}


def test_study_detail(api, fake_session):
    fake_session.add('POST', '/study/info/detail', _detail_json())
    detail = api.study_detail(5)
    assert fake_session.calls[0]['json'] == {'studyId': 5}
    assert detail.study.study_id == 5
    assert detail.leader.name == '방장'
    assert detail.schedule.week_days == ['화', '목']
    assert [c.comment_id for c in detail.comments] == [1]


def test_study_detail_missing_part(api, fake_session):
    fake_session.add('POST', '/study/info/detail', _detail_json(studyScheduleDetail=None))
    with pytest.raises(FetchError):
        api.study_detail(5)


def test_upload_study_image(api, fake_session):
    fake_session.add('POST', '/image/upload/study', {'imageUrl': 'https://img.test/a.png'})
    url = api.upload_study_image('a.png', io.BytesIO(b'png'), 'image/png')
    assert url == 'https://img.test/a.png'
    assert fake_session.calls[0]['files']['file'][0] == 'a.png'


def test_upload_without_url(api, fake_session):
    fake_session.add('POST', '/image/upload/study', {})
    with pytest.raises(ApiError):
        api.upload_study_image('a.png', io.BytesIO(b'png'), 'image/png')
