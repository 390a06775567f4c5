"""
스터디 만들기 3단계 마법사

기본 정보 -> 일정 설정 -> 상세 정보 -> (제출)

- 일정 설정, 상세 정보 단계에서는 이전 단계로 돌아갈 수 있다
- 마지막 단계에서 '다음'은 단계 이동이 아니라 제출이다
- 단계별 입력값은 세션에 보관하고, 첨부 이미지는 업로드 폴더에 임시 저장한다
"""
import logging
import os
import uuid

from werkzeug.utils import secure_filename

from .errors import ActionResult, ApiError, AuthRequired
from .models import split_tags

logger = logging.getLogger(__name__)

STEPS = ['basic', 'schedule', 'details']
STEP_LABELS = ['기본 정보', '일정 설정', '상세 정보']
MAX_TAGS = 5
SESSION_KEY = 'study_wizard'


class StudyWizard:

    def __init__(self, step=0, data=None):
        self.step = step
        self.data = data or {}

    @classmethod
    def from_session(cls, session):
        saved = session.get(SESSION_KEY) or {}
        step = saved.get('step', 0)
        if not 0 <= step < len(STEPS):
            step = 0
        return cls(step, dict(saved.get('data') or {}))

    def save(self, session):
        session[SESSION_KEY] = {'step': self.step, 'data': self.data}
        session.modified = True

    def clear(self, session):
        discard_image(self.data.get('image'))
        session.pop(SESSION_KEY, None)
        self.step = 0
        self.data = {}

    @property
    def current(self):
        return STEPS[self.step]

    @property
    def label(self):
        return STEP_LABELS[self.step]

    @property
    def is_first(self):
        return self.step == 0

    @property
    def is_last(self):
        return self.step == len(STEPS) - 1

    def next(self):
        """다음 단계로 이동한다. 마지막 단계라면 이동하지 않고 False를 돌려준다 (호출 측에서 제출)"""
        if self.is_last:
            return False
        self.step += 1
        return True

    def back(self):
        if self.is_first:
            return False
        self.step -= 1
        return True

    def update(self, values):
        self.data.update(values)

    def attach_image(self, image):
        discard_image(self.data.get('image'))
        self.data['image'] = image

    # ====== 제출 데이터 ======
    def assemble_payload(self, image_url):
        data = self.data
        return {
            'studyInfo': {
                'studyImageUrl': image_url,
                'title': data.get('title', ''),
                'type': data.get('type', ''),
                'recruitPeople': _to_int(data.get('member_count')),
                'introduction': data.get('description', ''),
                'topic': data.get('topic', ''),
                'difficulty': data.get('difficulty', ''),
                'tag': data.get('search_tags', ''),
                'kakaoOpenChatUrl': data.get('kakao_open_chat_url', ''),
            },
            'studySchedule': {
                'weekDay': ', '.join(data.get('days') or []),
                'startDay': data.get('start_date', ''),
                'endDay': data.get('end_date', ''),
                'period': data.get('duration', ''),
                'time': data.get('time', ''),
            },
        }

    def check_schedule_and_tags(self):
        """시작일이 종료일보다 앞서는지, 태그가 5개 이하인지 확인한다."""
        start, end = self.data.get('start_date'), self.data.get('end_date')
        if start and end and start >= end:
            return ActionResult.invalid('종료일은 시작일 이후여야 합니다.')
        if len(split_tags(self.data.get('search_tags'))) > MAX_TAGS:
            return ActionResult.invalid('검색 태그는 최대 {}개까지 입력 가능합니다.'.format(MAX_TAGS))
        return None


def missing_fields(payload):
    return [key for section in payload.values() for key, value in section.items() if not value]


def _to_int(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def save_image(file_storage, upload_folder):
    """첨부 이미지를 업로드 폴더에 임시 저장하고 세션에 넣을 정보를 돌려준다."""
    os.makedirs(upload_folder, exist_ok=True)
    filename = secure_filename(file_storage.filename) or 'image'
    path = os.path.join(upload_folder, '{}_{}'.format(uuid.uuid4().hex, filename))
    file_storage.save(path)
    return {'path': path, 'filename': filename, 'mimetype': file_storage.mimetype}


def discard_image(image):
    if image and os.path.exists(image['path']):
        os.remove(image['path'])


def submit_study(client, wizard):
    """
    스터디 생성

    1. 이미지 첨부 여부 확인 (없으면 요청 없이 거절)
    2. 일정/태그 확인
    3. 이미지 업로드 -> imageUrl
    4. 최종 데이터 조립 후 필수값 확인
    5. 스터디 생성 요청

    이미지 업로드 후 생성 요청이 실패하면 업로드된 이미지는 서버에 남는다.
    """
    image = wizard.data.get('image')
    if not image or not os.path.exists(image['path']):
        return ActionResult.invalid('이미지를 업로드해주세요!')

    invalid = wizard.check_schedule_and_tags()
    if invalid:
        return invalid

    try:
        with open(image['path'], 'rb') as stream:
            image_url = client.upload_study_image(image['filename'], stream, image['mimetype'])
    except AuthRequired:
        raise
    except ApiError as e:
        logger.error(f"스터디 이미지 업로드 실패: {e.message}")
        return ActionResult.failed('이미지 업로드에 실패했습니다.')

    payload = wizard.assemble_payload(image_url)
    missing = missing_fields(payload)
    if missing:
        logger.info(f"스터디 생성 필수값 누락: {missing}")
        return ActionResult.invalid('모든 필드를 채워주세요!')

    try:
        client.create_study(payload)
    except AuthRequired:
        raise
    except ApiError as e:
        logger.warning(f"스터디 생성 실패, 업로드된 이미지가 남습니다: {image_url} | {e.message}")
        return ActionResult.failed('스터디 생성 실패')

    logger.info(f"스터디 생성 완료: {payload['studyInfo']['title']}")
    return ActionResult.success('스터디 생성 완료! 홈으로 이동합니다.')
