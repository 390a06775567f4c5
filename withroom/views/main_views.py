from flask import Blueprint, render_template, url_for, g, flash, current_app
from werkzeug.utils import redirect

from withroom.errors import ApiError
from withroom.rendering import StudyCard
from withroom.tabs import FETCH_ERROR_MESSAGE
from .auth_views import get_client

bp = Blueprint('main', __name__, url_prefix='/')


@bp.route('/')
def index():
    return redirect(url_for('main.home'))


# 홈 화면
# - 로그인 상태 확인 후 로그인되어 있으면 닉네임 조회
# - 스터디 목록은 앞의 7개만 보여주고, 6개를 넘으면 '더 보기' 링크 표시
@bp.route('/home')
def home():
    client = get_client()

    try:
        is_authenticated = g.auth.is_authenticated and client.login_state()
    except ApiError as e:
        current_app.logger.warning(f"Auth state check failed: {e.message}")
        is_authenticated = False

    nick_name = None
    if is_authenticated:
        try:
            nick_name = client.member_info().get('nickName')
        except ApiError as e:
            current_app.logger.warning(f"Member info failed: {e.message}")

    studies = []
    if g.auth.is_authenticated:
        try:
            studies = client.home_studies()
        except ApiError as e:
            current_app.logger.warning(f"Home feed failed: {e.message}")
            flash(FETCH_ERROR_MESSAGE, 'error')

    limit = current_app.config['HOME_STUDY_LIMIT']
    return render_template('home.html',
                           is_authenticated=is_authenticated,
                           nick_name=nick_name,
                           cards=[StudyCard(study) for study in studies[:limit]],
                           show_more=len(studies) > limit - 1)
