from flask_wtf import FlaskForm
from flask_wtf.file import FileField, FileAllowed
from wtforms import (StringField, TextAreaField, SelectField, SelectMultipleField, IntegerField,
                     BooleanField, HiddenField, DateField)
from wtforms.validators import DataRequired, Length, Optional, NumberRange
from wtforms.widgets import ListWidget, CheckboxInput, HiddenInput

from .models import DIFFICULTIES, WEEK_DAYS
from .search import FILTER_OPTIONS

STUDY_TOPICS = FILTER_OPTIONS['topic'][1]
TIME_SLOTS = ['08:00 ~ 10:00', '10:00 ~ 12:00', '12:00 ~ 14:00', '14:00 ~ 16:00',
              '16:00 ~ 18:00', '18:00 ~ 20:00', '20:00 ~ 22:00']
PERIOD_SLOTS = ['1주', '1개월', '3개월', '6개월', '1년']
IMAGE_EXTENSIONS = ['jpg', 'jpeg', 'png', 'gif', 'webp']


def _choices(values, placeholder):
    return [('', placeholder)] + [(v, v) for v in values]


class MultiCheckboxField(SelectMultipleField):
    widget = ListWidget(prefix_label=False)
    option_widget = CheckboxInput()


# 스터디 만들기 1단계 - 기본 정보
# 단계별로는 형식만 확인하고, 필수값 확인은 제출할 때 한 번에 한다
class StudyBasicInfoForm(FlaskForm):
    image = FileField('대표 이미지', validators=[FileAllowed(IMAGE_EXTENSIONS, '이미지 파일만 업로드할 수 있습니다.')])
    title = StringField('스터디 제목', validators=[Optional(), Length(max=50)])
    kakao_open_chat_url = StringField('카카오 오픈 채팅 URL', validators=[Optional()])
    type = SelectField('스터디 유형', choices=[('', '선택'), ('offline', '오프라인'), ('online', '온라인')],
                       validators=[Optional()])
    member_count = IntegerField('모집 인원', validators=[Optional(), NumberRange(min=1)])
    topic = SelectField('스터디 주제', choices=_choices(STUDY_TOPICS, '선택'), validators=[Optional()])


# 2단계 - 일정 설정
class StudyScheduleForm(FlaskForm):
    days = MultiCheckboxField('요일', choices=[(d, d) for d in WEEK_DAYS], validators=[Optional()])
    start_date = DateField('시작일', validators=[Optional()])
    end_date = DateField('종료일', validators=[Optional()])
    time = SelectField('시간', choices=_choices(TIME_SLOTS, '선택'), validators=[Optional()])
    duration = SelectField('기간', choices=_choices(PERIOD_SLOTS, '선택'), validators=[Optional()])


# 3단계 - 상세 정보
class StudyDetailsForm(FlaskForm):
    description = TextAreaField('스터디 소개', validators=[Optional()])
    difficulty = SelectField('난이도', choices=_choices(DIFFICULTIES, '선택'), validators=[Optional()])
    search_tags = StringField('검색 태그', validators=[Optional()],
                              description='쉼표로 구분하여 최대 5개까지 입력 가능')


class CommentForm(FlaskForm):
    content = TextAreaField('내용', validators=[DataRequired('댓글을 입력해주세요.'),
                                              Length(max=300, message='댓글은 300자까지 입력할 수 있습니다.')])
    anonymous = BooleanField('비밀댓글')


# 확인 단계를 거치는 액션 (관심, 참여, 마감, 삭제, 댓글 삭제)
class ConfirmForm(FlaskForm):
    confirm = HiddenField(default='')
    liked = HiddenField(default='')
    closed = HiddenField(default='')
    next = HiddenField(default='')

    @property
    def confirmed(self):
        return self.confirm.data == 'yes'


class ResponseJoinForm(FlaskForm):
    member_id = IntegerField(widget=HiddenInput(), validators=[DataRequired()])
    accept = HiddenField(validators=[DataRequired()])


class TitleSearchForm(FlaskForm):
    class Meta:
        csrf = False

    title = StringField('제목', validators=[DataRequired('검색어를 입력해주세요.')])
