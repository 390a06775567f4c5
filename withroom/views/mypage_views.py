from flask import Blueprint, render_template, request, session, current_app

from withroom.errors import ApiError, AuthRequired
from withroom.paging import Pagination
from withroom.rendering import render_study_list, layout_mode, MOBILE
from withroom.tabs import TabState, TAB_LABELS, FETCH_ERROR_MESSAGE
from .auth_views import login_required, get_client

bp = Blueprint('mypage', __name__, url_prefix='/me')

# 직전에 보던 탭. 탭이 바뀐 요청인지 판단하는 데만 쓴다
LAST_TAB_KEY = 'mypage_tab'


# 내 정보 화면
# - tab 파라미터가 직전 탭과 다르면 탭 전환으로 보고 1페이지부터 보여준다
# - 모바일은 한 페이지에 4개, 데스크톱은 6개
@bp.route('/')
@login_required
def index():
    state = TabState.from_request(request.args, session.get(LAST_TAB_KEY))
    session[LAST_TAB_KEY] = state.active_tab
    layout = layout_mode(request.user_agent.string, request.args.get('layout'))
    if layout == MOBILE:
        per_page = current_app.config['MY_STUDIES_PER_PAGE_MOBILE']
    else:
        per_page = current_app.config['MY_STUDIES_PER_PAGE']

    error = None
    try:
        state.load(get_client())
    except AuthRequired:
        raise
    except ApiError as e:
        current_app.logger.error(f"My studies failed: tab={state.active_tab} | {e.message}")
        error = FETCH_ERROR_MESSAGE

    pagination = Pagination(state.studies, state.current_page, per_page)
    tree = render_study_list(False, error, pagination.items, state.empty_message,
                             layout=layout, card_type=state.active_tab)
    return render_template('mypage/my_info.html', state=state, tree=tree, pagination=pagination,
                           tab_labels=TAB_LABELS)
