"""
WITH ROOM 백엔드 REST API 클라이언트

모든 요청은 Bearer 토큰을 싣고 보내며, 토큰은 전역 저장소에서 직접 읽지 않고
AuthContext를 주입받아 사용한다.
"""
import logging
import time

import requests

from .errors import ApiError, AuthRequired, FetchError
from .logging_setup import log_api_call
from .models import Study, StudyDetail

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = '서버에 연결할 수 없습니다. 잠시 후 다시 시도해주세요.'
SERVER_ERROR_MESSAGE = '서버에서 오류가 발생했습니다. 잠시 후 다시 시도해주세요.'
MALFORMED_MESSAGE = '서버 응답 형식이 올바르지 않습니다.'


class AuthContext:
    """
    인증 컨텍스트

    토큰과, 토큰을 지우는 콜백을 함께 들고 다닌다.
    토큰을 쓰는 쪽(로그인 콜백, 로그아웃)만 on_clear를 호출한다.
    """

    def __init__(self, token=None, on_clear=None):
        self.token = token
        self._on_clear = on_clear

    @property
    def is_authenticated(self):
        return bool(self.token)

    def headers(self):
        if not self.token:
            return {}
        return {'Authorization': 'Bearer {}'.format(self.token)}

    def clear(self):
        self.token = None
        if self._on_clear:
            self._on_clear()


class StudyApiClient:

    def __init__(self, base_url, auth, timeout=5, session=None):
        self.base_url = base_url.rstrip('/')
        self.auth = auth
        self.timeout = timeout
        self.session = session or requests.Session()

    # ====== 공통 요청 처리 ======
    def request(self, method, path, json=None, params=None, files=None, auth_required=True):
        if auth_required and not self.auth.is_authenticated:
            raise AuthRequired()

        url = self.base_url + path
        start_time = time.time()
        try:
            response = self.session.request(
                method, url,
                headers=self.auth.headers(),
                json=json, params=params, files=files,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"API 요청 실패: {method} {path} | {e}")
            raise ApiError(NETWORK_ERROR_MESSAGE)

        log_api_call(logger, method, path, response.status_code, time.time() - start_time)

        if response.status_code == 401:
            raise AuthRequired(status=401)
        if not 200 <= response.status_code < 300:
            raise ApiError(SERVER_ERROR_MESSAGE, status=response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            logger.warning(f"JSON이 아닌 응답: {method} {path}")
            raise ApiError(MALFORMED_MESSAGE, status=response.status_code)

    def get(self, path, params=None, auth_required=True):
        return self.request('GET', path, params=params, auth_required=auth_required)

    def post(self, path, json=None, files=None):
        return self.request('POST', path, json=json, files=files)

    # ====== 인증 / 회원 ======
    def login_state(self):
        data = self.get('/oauth/login/state', auth_required=False)
        return isinstance(data, dict) and data.get('state') is True

    def member_info(self):
        data = self.get('/member/mypage/info')
        if not isinstance(data, dict):
            raise ApiError(MALFORMED_MESSAGE)
        return data

    def logout(self):
        self.post('/oauth/kakao/logout', json={})

    # ====== 스터디 목록 ======
    def home_studies(self):
        return study_list(self.get('/home/info'), 'homeStudyInfoList')

    def filter_studies(self, params):
        return study_list(self.get('/home/filter/info', params=params), 'homeStudyInfoList')

    def search_by_title(self, title):
        return study_list(self.get('/home/filter/title', params={'title': title}), 'homeStudyInfoList')

    # ====== 스터디 ======
    def study_detail(self, study_id):
        data = self.post('/study/info/detail', json={'studyId': study_id})
        try:
            return StudyDetail.from_json(data or {})
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"스터디 상세 응답 오류: studyId={study_id} | {e}")
            raise FetchError('스터디 정보를 불러오는데 실패했습니다.')

    def create_study(self, payload):
        return self.post('/study/create', json=payload)

    def delete_study(self, study_id):
        return self.post('/study/delete', json={'studyId': study_id}) is True

    def finish_study(self, study_id):
        return self.post('/study/finish', json={'studyId': study_id}) is True

    def join_study(self, study_id):
        return self.post('/study/join', json={'studyId': study_id}) is True

    def toggle_interest(self, study_id):
        return self.post('/study/interest', json={'studyId': study_id}) is True

    def respond_join(self, study_id, member_id, accept):
        return self.post('/study/response-join',
                         json={'state': bool(accept), 'studyId': study_id, 'memberId': member_id})

    def upload_study_image(self, filename, stream, mimetype):
        files = {'file': (filename, stream, mimetype)}
        data = self.post('/image/upload/study', files=files)
        if not isinstance(data, dict) or not data.get('imageUrl'):
            raise ApiError('이미지 업로드 응답이 올바르지 않습니다.')
        return data['imageUrl']

    # ====== 댓글 ======
    def create_comment(self, study_id, content, anonymous=False):
        return self.post('/comment/create',
                         json={'studyId': study_id, 'content': content, 'anonymous': bool(anonymous)})

    def delete_comment(self, comment_id):
        return self.post('/comment/delete', json={'commentId': comment_id})


def study_list(data, field):
    """
    응답에서 스터디 목록 필드를 꺼내 Study 리스트로 변환한다.

    필드가 없으면 빈 목록으로 취급하고, 형식이 맞지 않으면 FetchError를 던진다.
    """
    if data is None:
        return []
    if not isinstance(data, dict):
        raise FetchError(MALFORMED_MESSAGE)
    items = data.get(field)
    if items is None:
        return []
    if not isinstance(items, list):
        raise FetchError(MALFORMED_MESSAGE)
    try:
        return [Study.from_json(item) for item in items]
    except (KeyError, TypeError, AttributeError):
        raise FetchError(MALFORMED_MESSAGE)
