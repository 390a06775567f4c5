"""
화면에서 사용하는 데이터 모델

모든 데이터의 소유자는 백엔드 서버이며, 클라이언트는 화면을 그리는 동안만
응답의 사본을 들고 있다. 각 모델은 서버 응답(camelCase JSON)에서 생성한다.
"""
from dataclasses import dataclass, field
from datetime import date, datetime

DIFFICULTIES = ['초급', '중급', '고급']
WEEK_DAYS = ['월', '화', '수', '목', '금', '토', '일']
STUDY_TYPES = {'online': '온라인', 'offline': '오프라인'}


def split_tags(value):
    """쉼표로 구분된 태그 문자열(또는 리스트)을 태그 리스트로 변환한다."""
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        value = ','.join(str(v) for v in value)
    return [tag.strip() for tag in value.split(',') if tag.strip()]


def _to_int(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


@dataclass
class Study:
    study_id: int
    title: str = ''
    introduction: str = ''
    topic: str = ''
    difficulty: str = ''
    tag: str = ''
    type: str = ''
    study_image_url: str = ''
    now_people: int = 0
    recruit_people: int = 0
    interest: bool = False
    state: bool = True
    finish: bool = False
    member_id: object = None
    nick_name: str = None
    preferred_area: str = None

    @classmethod
    def from_json(cls, data):
        return cls(
            study_id=data['studyId'],
            title=data.get('title') or '',
            introduction=data.get('introduction') or '',
            topic=data.get('topic') or '',
            difficulty=data.get('difficulty') or '',
            tag=data.get('tag') or '',
            type=data.get('type') or '',
            study_image_url=data.get('studyImageUrl') or '',
            now_people=_to_int(data.get('nowPeople')),
            recruit_people=_to_int(data.get('recruitPeople')),
            interest=bool(data.get('interest', False)),
            # 홈 목록 외의 응답에는 state가 없으므로 모집 중으로 본다
            state=bool(data.get('state', True)),
            finish=bool(data.get('finish', False)),
            member_id=data.get('memberId'),
            nick_name=data.get('nickName'),
            preferred_area=data.get('preferredArea'),
        )

    @property
    def is_closed(self):
        return self.now_people == self.recruit_people

    @property
    def tags(self):
        # 목록 응답은 topic에, 상세 응답은 tag에 태그를 담는다
        return split_tags(self.tag or self.topic)

    @property
    def type_label(self):
        return STUDY_TYPES.get((self.type or '').lower(), '오프라인')

    @property
    def recruitment_text(self):
        if self.is_closed:
            return '마감됨'
        return '{}/{}'.format(self.now_people, self.recruit_people)


@dataclass
class Comment:
    comment_id: int
    content: str
    nick_name: str = ''
    anonymous: bool = False
    comment_date_time: datetime = None

    @classmethod
    def from_json(cls, data):
        return cls(
            comment_id=data['commentId'],
            content=data.get('content') or '',
            nick_name=data.get('nickName') or '',
            anonymous=bool(data.get('anonymous', False)),
            comment_date_time=parse_datetime(data.get('commentDateTime')),
        )

    @property
    def display_name(self):
        return '익명' if self.anonymous else self.nick_name

    @property
    def avatar(self):
        # 익명 댓글은 아바타에도 닉네임을 노출하지 않는다
        if self.anonymous:
            return '익명'
        return self.nick_name[:1]


@dataclass
class Schedule:
    week_day: str = ''
    start_day: str = ''
    end_day: str = ''
    time: str = ''
    period: str = ''
    now_people: int = 0
    recruit_people: int = 0

    @classmethod
    def from_json(cls, data):
        return cls(
            week_day=data.get('weekDay') or '',
            start_day=data.get('startDay') or '',
            end_day=data.get('endDay') or '',
            time=data.get('time') or '',
            period=data.get('period') or '',
            now_people=_to_int(data.get('nowPeople')),
            recruit_people=_to_int(data.get('recruitPeople')),
        )

    @property
    def week_days(self):
        return [day for day in WEEK_DAYS if day in self.week_day]

    def is_finished(self, today=None, finish_flag=False):
        """
        마감 여부 (화면 표시용)

        오늘 날짜가 종료일을 지났거나 서버가 finish 플래그를 내려주면 마감이다.
        ISO 날짜 문자열은 사전순 비교가 곧 날짜 비교다.
        """
        if finish_flag:
            return True
        if today is None:
            today = date.today()
        if isinstance(today, date):
            today = today.isoformat()
        return bool(self.end_day) and today > self.end_day


@dataclass
class GroupLeader:
    name: str = ''
    preferred_area: str = ''

    @classmethod
    def from_json(cls, data):
        return cls(name=data.get('name') or '', preferred_area=data.get('preferredArea') or '')


@dataclass
class StudyDetail:
    study: Study
    leader: GroupLeader
    schedule: Schedule
    comments: list = field(default_factory=list)

    @classmethod
    def from_json(cls, data):
        missing = [key for key in ('studyDetail', 'studyGroupLeader', 'studyScheduleDetail') if not data.get(key)]
        if missing:
            raise ValueError('스터디 상세 응답에 {} 항목이 없습니다.'.format(', '.join(missing)))
        return cls(
            study=Study.from_json(data['studyDetail']),
            leader=GroupLeader.from_json(data['studyGroupLeader']),
            schedule=Schedule.from_json(data['studyScheduleDetail']),
            comments=[Comment.from_json(c) for c in data.get('studyCommentList') or []],
        )


def parse_datetime(value):
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    except ValueError:
        return None
