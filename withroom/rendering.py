"""
스터디 목록 / 카드 렌더링

render_study_list()는 (로딩 여부, 에러, 보여줄 항목, 빈 목록 메시지)만으로
무엇을 그릴지 결정하는 순수 함수다. 템플릿은 결과의 kind만 보고 분기한다.
모바일/데스크톱은 별도 컴포넌트가 아니라 layout 인자로 구분한다.
"""
from dataclasses import dataclass, field

from markupsafe import Markup

from .tabs import REQUEST_JOIN

MOBILE = 'mobile'
DESKTOP = 'desktop'

LOADING = 'loading'
ERROR = 'error'
EMPTY = 'empty'
CARDS = 'cards'

# 레이아웃별 카드 열 수
COLUMNS = {MOBILE: 1, DESKTOP: 3}


def layout_mode(user_agent, override=None):
    if override in (MOBILE, DESKTOP):
        return override
    if user_agent and 'Mobi' in user_agent:
        return MOBILE
    return DESKTOP


@dataclass
class StudyCard:
    study: object
    card_type: str = None

    @property
    def key(self):
        return self.study.study_id

    @property
    def closed(self):
        return self.study.is_closed

    @property
    def show_response_buttons(self):
        # 수락/거절과 신청자 정보는 '참여 신청 온 스터디' 탭에서만
        return self.card_type == REQUEST_JOIN

    @property
    def join_enabled(self):
        return self.study.state and not self.closed

    @property
    def join_label(self):
        return '참여하기' if self.join_enabled else '마감됨'


@dataclass
class RenderTree:
    kind: str
    message: str = None
    cards: list = field(default_factory=list)
    layout: str = DESKTOP

    @property
    def keys(self):
        return [card.key for card in self.cards]

    @property
    def columns(self):
        return COLUMNS[self.layout]


def render_study_list(loading, error, visible_items, empty_message, layout=DESKTOP, card_type=None):
    """
    그릴 내용을 결정한다.

    - 로딩 중이면 로딩 표시만
    - 에러가 있으면 빈 목록 메시지 대신 에러 문구
    - 보여줄 항목이 없으면 탭별 빈 목록 메시지
    - 그 외에는 studyId를 키로 하는 카드 목록
    """
    if loading:
        return RenderTree(LOADING, layout=layout)
    if error:
        return RenderTree(ERROR, message=str(error), layout=layout)
    if not visible_items:
        return RenderTree(EMPTY, message=empty_message, layout=layout)
    cards = [StudyCard(study, card_type) for study in visible_items]
    return RenderTree(CARDS, cards=cards, layout=layout)


def sanitize_introduction(html):
    """에디터에서 작성된 소개글의 태그를 모두 걷어내고 안전한 텍스트로 만든다."""
    if not html:
        return ''
    return Markup(html).striptags()
