"""
내 정보(마이페이지) 탭

탭 식별자 → (엔드포인트, 응답 필드) 를 고정 테이블로 매핑한다.
테이블에 없는 탭은 프로그래밍 오류로 보고 KeyError를 그대로 올린다.
"""
from .api import study_list

CREATED = 'created'
PARTICIPATING = 'participating'
REQUEST_JOIN = 'request-join'
LIKED = 'liked'
JOIN = 'join'

TABS = [CREATED, PARTICIPATING, REQUEST_JOIN, LIKED, JOIN]

TAB_ENDPOINTS = {
    CREATED: '/study/mypage/info/mystudy',
    PARTICIPATING: '/study/mypage/info/part',
    REQUEST_JOIN: '/study/mypage/info/request-join',
    LIKED: '/study/mypage/info/interest',
    JOIN: '/study/mypage/info/join',
}

TAB_FIELDS = {
    CREATED: 'groupLeaderStudies',
    PARTICIPATING: 'participationStudies',
    REQUEST_JOIN: 'responseSignUpStudies',
    LIKED: 'interestStudies',
    JOIN: 'signUpStudies',
}

TAB_LABELS = {
    CREATED: '내가 만든 스터디',
    PARTICIPATING: '참여 중 스터디',
    REQUEST_JOIN: '참여 신청 온 스터디',
    LIKED: '관심 스터디',
    JOIN: '신청한 스터디',
}

EMPTY_MESSAGES = {
    CREATED: '생성한 스터디가 없습니다.',
    PARTICIPATING: '참여 중인 스터디가 없습니다.',
    REQUEST_JOIN: '참여 신청 온 스터디가 없습니다.',
    LIKED: '관심 스터디가 없습니다.',
    JOIN: '참여 신청한 스터디가 없습니다.',
}

FETCH_ERROR_MESSAGE = '스터디 목록을 불러오는데 실패했습니다.'


def fetch_tab_studies(client, tab):
    """탭에 해당하는 스터디 전체 목록을 가져온다. 실패 시 FetchError (재시도 없음)"""
    endpoint = TAB_ENDPOINTS[tab]
    field = TAB_FIELDS[tab]
    return study_list(client.get(endpoint), field)


class TabState:
    """
    활성 탭과 현재 페이지

    - 초기 탭은 created, 페이지는 1
    - 다른 탭으로 바꾸면 요청에 page가 있어도 항상 1페이지로 돌아간다
    - 요청마다 새로 만들어지고, 조회 결과는 그 요청의 화면에만 쓰인다
      (이전 탭의 응답이 나중에 도착해 덮어쓸 공유 상태가 없다)
    """

    def __init__(self, active_tab=CREATED, current_page=1):
        if active_tab not in TAB_ENDPOINTS:
            raise KeyError(active_tab)
        self.active_tab = active_tab
        self.current_page = max(1, current_page)
        self.studies = []

    @classmethod
    def from_request(cls, args, last_tab=None):
        """
        직전에 보던 탭(last_tab)과 쿼리스트링(tab, page)으로 상태를 만든다.

        tab이 직전 탭과 다르면 전환으로 보고 page를 무시한다.
        알 수 없는 탭 값은 무시한다.
        """
        state = cls(last_tab if last_tab in TAB_ENDPOINTS else CREATED)
        tab = args.get('tab')
        if tab in TAB_ENDPOINTS and tab != state.active_tab:
            state.switch(tab)
        else:
            state.go_to(args.get('page', type=int, default=1) or 1)
        return state

    def switch(self, tab):
        if tab not in TAB_ENDPOINTS:
            raise KeyError(tab)
        self.active_tab = tab
        self.current_page = 1
        self.studies = []
        return self

    def go_to(self, page):
        self.current_page = max(1, page)
        return self

    def load(self, client):
        self.studies = fetch_tab_studies(client, self.active_tab)
        return self.studies

    @property
    def label(self):
        return TAB_LABELS[self.active_tab]

    @property
    def empty_message(self):
        return EMPTY_MESSAGES[self.active_tab]
