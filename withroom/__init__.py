from flask import Flask, flash, g, redirect, render_template, url_for
from flask_wtf import CSRFProtect
import requests

import config
from .actions import InFlightGuard
from .errors import ApiError, AuthRequired
from .logging_setup import setup_logging

'''
csrf, in_flight 객체는 모듈 레벨에서 생성하고 create_app 함수에서 앱에 등록한다.
- in_flight : 사용자별로 처리 중인 변경 요청 목록 (중복 제출 방지)
- 백엔드 호출에 쓰는 HTTP 세션은 app.extensions에 넣어 두고, 테스트에서는 가짜 세션을 주입한다.
'''
csrf = CSRFProtect()
in_flight = InFlightGuard()


def create_app(test_config=None, http_session=None):
    app = Flask(__name__)
    app.config.from_object(config)
    if test_config:
        app.config.update(test_config)

    setup_logging(app)
    csrf.init_app(app)
    app.extensions['withroom.http'] = http_session or requests.Session()

    # 블루프린트
    from .views import main_views, auth_views, study_views, comment_views, mypage_views
    app.register_blueprint(main_views.bp)
    app.register_blueprint(auth_views.bp)
    app.register_blueprint(study_views.bp)
    app.register_blueprint(comment_views.bp)
    app.register_blueprint(mypage_views.bp)

    # 필터
    from .filter import format_datetime
    app.jinja_env.filters['datetime'] = format_datetime

    # 에러 핸들러 - 각 뷰에서 잡지 못한 경우에만 여기까지 온다
    @app.errorhandler(AuthRequired)
    def handle_auth_required(e):
        # 만료된 토큰은 지우고 다시 로그인하도록 안내한다
        if e.status == 401 and g.get('auth'):
            g.auth.clear()
        flash('로그인이 필요합니다. 로그인 페이지로 이동합니다.', 'error')
        return redirect(url_for('auth.login'))

    @app.errorhandler(ApiError)
    def handle_api_error(e):
        app.logger.error(f"Unhandled API error: {e.message} (status={e.status})")
        return render_template('error.html', message=e.message), 502

    app.logger.info('All blueprints registered')
    return app
