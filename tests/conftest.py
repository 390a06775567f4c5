"""테스트 공통 설정 - 백엔드 대신 가짜 HTTP 세션을 주입한다."""
import json

import pytest
import requests

from withroom import create_app
from withroom.api import AuthContext, StudyApiClient

BASE_URL = 'http://backend.test'

NO_BODY = object()


class FakeResponse:

    def __init__(self, status_code=200, payload=NO_BODY, raw=None):
        self.status_code = status_code
        if raw is not None:
            self.content = raw
        elif payload is NO_BODY:
            self.content = b''
        else:
            self.content = json.dumps(payload).encode('utf-8')

    def json(self):
        return json.loads(self.content.decode('utf-8'))


class FakeSession:
    """
    requests.Session 대용

    routes[(method, path)] 에 FakeResponse, 예외, 또는 호출 가능한 객체를 등록한다.
    등록되지 않은 경로는 404를 돌려준다.
    """

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, method, path, payload=NO_BODY, status=200):
        self.routes[(method, path)] = FakeResponse(status, payload)

    def fail(self, method, path, exc=None):
        self.routes[(method, path)] = exc or requests.exceptions.ConnectionError('boom')

    def request(self, method, url, headers=None, json=None, params=None, files=None, timeout=None):
        path = url[len(BASE_URL):]
        self.calls.append({'method': method, 'path': path, 'headers': headers or {},
                           'json': json, 'params': params, 'files': files})
        route = self.routes.get((method, path), FakeResponse(404, {'message': 'not found'}))
        if isinstance(route, Exception):
            raise route
        if callable(route) and not isinstance(route, FakeResponse):
            return route(method, path, json, params)
        return route

    def paths(self, method=None):
        return [c['path'] for c in self.calls if method is None or c['method'] == method]


def study_json(study_id, **overrides):
    data = {
        'studyId': study_id,
        'title': '스터디 {}'.format(study_id),
        'topic': '파이썬, 알고리즘',
        'difficulty': '초급',
        'type': 'online',
        'studyImageUrl': 'https://img.test/{}.png'.format(study_id),
        'nowPeople': 1,
        'recruitPeople': 4,
        'interest': False,
    }
    data.update(overrides)
    return data


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def api(fake_session):
    return StudyApiClient(BASE_URL, AuthContext('token-1'), session=fake_session)


@pytest.fixture
def app(fake_session, tmp_path):
    app = create_app({
        'TESTING': True,
        'WTF_CSRF_ENABLED': False,
        'SECRET_KEY': 'test',
        'API_BASE_URL': BASE_URL,
        'LOG_DIR': str(tmp_path / 'logs'),
        'UPLOAD_FOLDER': str(tmp_path / 'uploads'),
    }, http_session=fake_session)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def logged_in(client):
    with client.session_transaction() as session:
        session['accessToken'] = 'token-1'
    return client
