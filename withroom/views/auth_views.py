from urllib.parse import urlencode, urlparse

from flask import Blueprint, url_for, render_template, flash, request, session, g, current_app
from werkzeug.utils import redirect
import functools

from withroom.api import AuthContext, StudyApiClient
from withroom.errors import ApiError, AuthRequired

bp = Blueprint('auth', __name__, url_prefix='/oauth')

# 토큰을 보관하는 고정 키. 로그인 콜백과 로그아웃만 이 값을 쓰고 지운다.
TOKEN_KEY = 'accessToken'


# 모든 라우팅 함수보다 먼저 실행되어 인증 컨텍스트를 만든다
# 다른 컴포넌트는 세션을 직접 읽지 않고 g.auth를 주입받아 사용한다
@bp.before_app_request
def load_auth_context():
    g.auth = AuthContext(session.get(TOKEN_KEY), on_clear=lambda: session.pop(TOKEN_KEY, None))


def is_safe_next(url):
    """같은 사이트 안의 경로만 허용한다 ('//host', 스킴이 붙은 주소는 거부)"""
    if not url or not url.startswith('/') or url.startswith('//') or '\\' in url:
        return False
    parsed = urlparse(url)
    return not parsed.scheme and not parsed.netloc


def get_client(auth=None):
    """요청마다 백엔드 API 클라이언트를 만든다."""
    return StudyApiClient(
        current_app.config['API_BASE_URL'],
        auth or g.auth,
        timeout=current_app.config['API_TIMEOUT'],
        session=current_app.extensions['withroom.http'],
    )


# 토큰이 없으면 로그인 안내 페이지로 리다이렉트하는 데코레이터 함수
def login_required(view):
    @functools.wraps(view)
    def wrapped_view(*args, **kwargs):
        if not g.auth.is_authenticated:
            flash('로그인이 필요합니다. 로그인 페이지로 이동합니다.', 'error')
            _next = request.full_path.rstrip('?') if request.method == 'GET' else ''
            return redirect(url_for('auth.login', next=_next))
        return view(*args, **kwargs)
    return wrapped_view


# 로그인 안내 페이지 (카카오 로그인 버튼)
@bp.route('/login/')
def login():
    _next = request.args.get('next', '')
    if _next:
        session['next_url'] = _next
    return render_template('auth/login.html')


# 카카오 인가 페이지로 이동 (OAuth 처리 자체는 카카오와 백엔드가 담당)
@bp.route('/kakao/')
def kakao():
    params = {
        'client_id': current_app.config['KAKAO_REST_API_KEY'],
        'redirect_uri': current_app.config['KAKAO_REDIRECT_URI'],
        'response_type': 'code',
    }
    return redirect('{}?{}'.format(current_app.config['KAKAO_AUTHORIZE_URL'], urlencode(params)))


# 백엔드가 카카오 인증을 마친 뒤 accessToken을 실어 이 주소로 돌려보낸다
@bp.route('/callback')
def callback():
    token = request.args.get(TOKEN_KEY, '')
    if not token:
        flash('로그인에 실패했습니다. 다시 시도해주세요.', 'error')
        return redirect(url_for('auth.login'))
    session[TOKEN_KEY] = token
    current_app.logger.info('Login succeeded')
    _next = session.pop('next_url', '')
    if is_safe_next(_next):
        return redirect(_next)
    return redirect(url_for('main.home'))


@bp.route('/logout/', methods=('POST',))
def logout():
    if g.auth.is_authenticated:
        try:
            get_client().logout()
        except AuthRequired:
            current_app.logger.info('Logout with expired token')
        except ApiError as e:
            current_app.logger.error(f"Logout failed: {e.message}")
            flash('로그아웃에 실패했습니다.', 'error')
            return redirect(url_for('main.home'))
    g.auth.clear()
    flash('로그아웃 되었습니다.', 'success')
    return redirect(url_for('main.home'))
