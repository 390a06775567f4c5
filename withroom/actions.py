"""
사용자 액션 (관심, 참여, 수락/거절, 마감, 삭제, 댓글)

- 모든 액션은 에러를 여기서 잡아 ActionResult로 돌려준다 (AuthRequired만 뷰로 올린다)
- 확인이 필요한 액션은 confirmed가 False이면 아무 요청도 보내지 않는다
- 로컬 상태는 서버가 성공을 알려준 뒤에만 바꾼다
"""
import functools
import logging
import threading

from .errors import ActionResult, ApiError, AuthRequired
from .tabs import CREATED, fetch_tab_studies

logger = logging.getLogger(__name__)

COMMENT_MAX_LENGTH = 300
IN_FLIGHT_MESSAGE = '요청을 처리하고 있습니다. 잠시만 기다려주세요.'


def _catch_api_errors(failure_message):
    """ApiError를 실패 결과로 바꾸는 데코레이터 (AuthRequired는 그대로 올린다)"""
    def decorator(func):
        @functools.wraps(func)
        def wrapped(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except AuthRequired:
                raise
            except ApiError as e:
                logger.error(f"{func.__name__} 실패: {e.message} (status={e.status})")
                return ActionResult.failed(failure_message)
        return wrapped
    return decorator


class InFlightGuard:
    """
    진행 중인 변경 요청 목록

    같은 사용자가 같은 대상에 대해 같은 액션을 처리 중일 때
    두 번째 요청은 서버로 보내지 않고 거절한다 (더블 클릭 방지).
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._keys = set()

    def acquire(self, key):
        with self._lock:
            if key in self._keys:
                return False
            self._keys.add(key)
            return True

    def release(self, key):
        with self._lock:
            self._keys.discard(key)

    def run(self, key, func, *args, **kwargs):
        if not self.acquire(key):
            logger.info(f"중복 요청 거절: {key}")
            return ActionResult.rejected(IN_FLIGHT_MESSAGE)
        try:
            return func(*args, **kwargs)
        finally:
            self.release(key)


# ====== 관심 ======
@_catch_api_errors('관심 등록에 실패했습니다.')
def check_like_allowed(client, study_id):
    """그룹장은 자신의 스터디에 관심을 추가할 수 없다. 가능하면 None"""
    led_studies = fetch_tab_studies(client, CREATED)
    if any(study.study_id == study_id for study in led_studies):
        return ActionResult.rejected('스터디 그룹장은 관심 추가할 수 없습니다.')
    return None


@_catch_api_errors('관심 등록에 실패했습니다.')
def toggle_like(client, study_id, currently_liked, confirmed):
    if not confirmed:
        return ActionResult.cancelled()

    # 확인 화면을 거치지 않고 들어온 요청도 그룹장 여부를 확인한다
    refused = check_like_allowed(client, study_id)
    if refused:
        return refused

    if not client.toggle_interest(study_id):
        return ActionResult.rejected('관심 변경이 반영되지 않았습니다. 다시 시도해주세요.')

    liked = not currently_liked
    message = '관심이 등록되었습니다.' if liked else '관심이 취소되었습니다.'
    return ActionResult.success(message, value=liked)


# ====== 참여 ======
@_catch_api_errors('스터디 신청 중 오류가 발생했습니다.')
def join_study(client, study_id, confirmed, closed=False):
    if closed:
        return ActionResult.rejected('모집이 마감된 스터디입니다.')
    if not confirmed:
        return ActionResult.cancelled()
    # 인원수는 여기서 고치지 않고 다음 조회 때 서버 값을 그대로 사용한다
    if not client.join_study(study_id):
        return ActionResult.rejected('그룹장이거나 이미 신청한 스터디입니다. 그룹장은 스터디에 참여할 수 없습니다.')
    return ActionResult.success('스터디 신청 완료')


@_catch_api_errors('오류가 발생했습니다. 다시 시도해주세요.')
def respond_join(client, study_id, member_id, accept):
    client.respond_join(study_id, member_id, accept)
    if accept:
        return ActionResult.success('스터디 참여 요청을 수락했습니다.')
    return ActionResult.success('스터디 참여 요청을 거절했습니다.')


# ====== 마감 / 삭제 ======
@_catch_api_errors('스터디 마감에 실패했습니다.')
def finish_study(client, study_id, confirmed):
    if not confirmed:
        return ActionResult.cancelled()
    if not client.finish_study(study_id):
        return ActionResult.rejected('그룹장만 스터디를 마감할 수 있습니다.')
    return ActionResult.success('스터디를 마감합니다.')


@_catch_api_errors('스터디 삭제 중 오류가 발생했습니다. 시스템에 문의해주세요.')
def delete_study(client, study_id, confirmed):
    if not confirmed:
        return ActionResult.cancelled()
    if not client.delete_study(study_id):
        return ActionResult.rejected('스터디 삭제 실패! 다시 시도해주세요.')
    return ActionResult.success('스터디가 삭제되었습니다.')


# ====== 댓글 ======
def validate_comment(content):
    if not content or not content.strip():
        return ActionResult.invalid('댓글을 입력해주세요.')
    if len(content) > COMMENT_MAX_LENGTH:
        return ActionResult.invalid('댓글은 {}자까지 입력할 수 있습니다.'.format(COMMENT_MAX_LENGTH))
    return None


@_catch_api_errors('댓글 추가에 실패했습니다.')
def create_comment(client, study_id, content, anonymous=False):
    invalid = validate_comment(content)
    if invalid:
        return invalid
    client.create_comment(study_id, content, anonymous)
    return ActionResult.success('댓글이 추가되었습니다.')


@_catch_api_errors('댓글 삭제에 실패했습니다.')
def delete_comment(client, comment_id, confirmed):
    if not confirmed:
        return ActionResult.cancelled()
    client.delete_comment(comment_id)
    return ActionResult.success('댓글이 삭제되었습니다.')
