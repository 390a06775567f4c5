from datetime import date

from flask import Blueprint, render_template, request, url_for, g, flash, session, current_app
from werkzeug.utils import redirect

from withroom import in_flight
from withroom.actions import (check_like_allowed, toggle_like, join_study, respond_join, finish_study,
                              delete_study)
from withroom.errors import ApiError, AuthRequired
from withroom.forms import (ConfirmForm, ResponseJoinForm, TitleSearchForm,
                            StudyBasicInfoForm, StudyScheduleForm, StudyDetailsForm, CommentForm)
from withroom.logging_setup import log_user_action
from withroom.paging import Pagination
from withroom.rendering import render_study_list, sanitize_introduction, layout_mode
from withroom.search import SearchFilter, FILTER_OPTIONS
from withroom.study_wizard import StudyWizard, STEP_LABELS, save_image, submit_study
from withroom.tabs import REQUEST_JOIN, FETCH_ERROR_MESSAGE
from .auth_views import login_required, get_client, is_safe_next

bp = Blueprint('study', __name__, url_prefix='/study')

LIST_EMPTY_MESSAGE = '조건에 맞는 스터디가 없습니다.'

WIZARD_FORMS = {
    'basic': StudyBasicInfoForm,
    'schedule': StudyScheduleForm,
    'details': StudyDetailsForm,
}


def _flash_result(result):
    flash(result.message, result.flash_category)


def _next_url(form, default):
    _next = form.next.data
    if is_safe_next(_next):
        return _next
    return default


def _in_flight_key(action, target):
    return (g.auth.token, action, target)


# 확인 단계: 확인 버튼을 누르면 같은 주소로 confirm=yes를 다시 보낸다
def _confirm_page(form, title, text, confirm_label):
    form.confirm.data = 'yes'
    return render_template('confirm.html', form=form, title=title, text=text,
                           confirm_label=confirm_label, action_url=request.path,
                           cancel_url=_next_url(form, url_for('main.home')))


# ====== 목록 / 검색 ======
@bp.route('/list/')
@login_required
def _list():
    page = request.args.get('page', type=int, default=1)
    search_form = TitleSearchForm(request.args)
    search_filter = SearchFilter.from_args(request.args)
    title = request.args.get('title', '').strip()

    client = get_client()
    error = None
    try:
        if title:
            studies = client.search_by_title(title)
        elif search_filter.active:
            studies = client.filter_studies(search_filter.params())
        else:
            studies = client.home_studies()
    except AuthRequired:
        raise
    except ApiError as e:
        current_app.logger.warning(f"Study list failed: {e.message}")
        error = FETCH_ERROR_MESSAGE
        studies = []

    pagination = Pagination(studies, page, current_app.config['STUDY_LIST_PER_PAGE'])
    layout = layout_mode(request.user_agent.string, request.args.get('layout'))
    tree = render_study_list(False, error, pagination.items, LIST_EMPTY_MESSAGE, layout=layout)
    return render_template('study/study_list.html', tree=tree, pagination=pagination,
                           search_form=search_form, search_filter=search_filter,
                           filter_options=FILTER_OPTIONS, title=title)


# ====== 상세 ======
@bp.route('/detail/<int:study_id>/')
@login_required
def detail(study_id):
    client = get_client()
    try:
        study_detail = client.study_detail(study_id)
    except AuthRequired:
        raise
    except ApiError as e:
        current_app.logger.error(f"Study detail failed: studyId={study_id} | {e.message}")
        return render_template('study/study_detail.html', error=e.message, study_id=study_id)

    finished = study_detail.schedule.is_finished(date.today(), _finish_flag(client, study_id))
    if finished:
        flash('마감된 스터디입니다', 'warning')

    return render_template('study/study_detail.html',
                           detail=study_detail,
                           introduction=sanitize_introduction(study_detail.study.introduction),
                           finished=finished,
                           comment_form=CommentForm(),
                           study_id=study_id)


def _finish_flag(client, study_id):
    # 서버가 내려주는 마감 플래그는 목록 응답에만 있다
    try:
        studies = client.filter_studies({})
    except AuthRequired:
        raise
    except ApiError as e:
        current_app.logger.warning(f"Finish flag lookup failed: {e.message}")
        return False
    return any(study.study_id == study_id and study.finish for study in studies)


# ====== 스터디 만들기 ======
@bp.route('/create/', methods=('GET', 'POST'))
@login_required
def create():
    wizard = StudyWizard.from_session(session)
    form_class = WIZARD_FORMS[wizard.current]

    if request.method == 'POST':
        action = request.form.get('action', 'next')
        if action == 'cancel':
            wizard.clear(session)
            return redirect(url_for('main.home'))
        if action == 'back':
            wizard.back()
            wizard.save(session)
            return redirect(url_for('study.create'))

        form = form_class()
        if form.validate_on_submit():
            _store_step(wizard, form)
            if wizard.is_last:
                result = in_flight.run(_in_flight_key('create', None), submit_study, get_client(), wizard)
                _flash_result(result)
                if result.ok:
                    wizard.clear(session)
                    return redirect(url_for('main.home'))
                wizard.save(session)
                return redirect(url_for('study.create'))
            wizard.next()
            wizard.save(session)
            return redirect(url_for('study.create'))
        for field, errors in form.errors.items():
            for error in errors:
                flash(error, 'error')
    else:
        form = form_class(data=_prefill(wizard))

    return render_template('study/study_form.html', form=form, wizard=wizard, steps=STEP_LABELS)


def _store_step(wizard, form):
    values = {}
    for name, field in form._fields.items():
        if name in ('csrf_token', 'image'):
            continue
        value = field.data
        if isinstance(value, date):
            value = value.isoformat()
        values[name] = value if value is not None else ''
    wizard.update(values)
    if wizard.current == 'basic' and form.image.data:
        wizard.attach_image(save_image(form.image.data, current_app.config['UPLOAD_FOLDER']))


def _prefill(wizard):
    data = dict(wizard.data)
    for key in ('start_date', 'end_date'):
        if data.get(key):
            data[key] = date.fromisoformat(data[key])
    return data


# ====== 관심 / 참여 ======
@bp.route('/interest/<int:study_id>/', methods=('POST',))
@login_required
def interest(study_id):
    form = ConfirmForm()
    currently_liked = form.liked.data == 'true'
    if not form.confirmed:
        # 그룹장이면 확인을 묻지 않고 바로 알려준다
        refused = check_like_allowed(get_client(), study_id)
        if refused:
            _flash_result(refused)
            return redirect(_next_url(form, url_for('study.detail', study_id=study_id)))
        text = '관심을 취소하시겠습니까?' if currently_liked else '관심 스터디로 등록하시겠습니까?'
        return _confirm_page(form, '관심 스터디', text, '확인')

    result = in_flight.run(_in_flight_key('interest', study_id),
                           toggle_like, get_client(), study_id, currently_liked, True)
    log_user_action(current_app.logger, 'interest', study_id, result)
    _flash_result(result)
    return redirect(_next_url(form, url_for('study.detail', study_id=study_id)))


@bp.route('/join/<int:study_id>/', methods=('POST',))
@login_required
def join(study_id):
    form = ConfirmForm()
    closed = form.closed.data == 'true'
    if not closed and not form.confirmed:
        return _confirm_page(form, '스터디 참여', '이 스터디에 참여 신청하시겠습니까?', '참여하기')

    result = in_flight.run(_in_flight_key('join', study_id),
                           join_study, get_client(), study_id, form.confirmed, closed)
    log_user_action(current_app.logger, 'join', study_id, result)
    _flash_result(result)
    return redirect(_next_url(form, url_for('study.detail', study_id=study_id)))


# 참여 신청 수락/거절 - 처리 후 마이페이지의 '참여 신청 온 스터디' 탭이 다시 조회한다
@bp.route('/response-join/<int:study_id>/', methods=('POST',))
@login_required
def response_join(study_id):
    form = ResponseJoinForm()
    if form.validate_on_submit():
        accept = form.accept.data == 'true'
        result = in_flight.run(_in_flight_key('response-join', (study_id, form.member_id.data)),
                               respond_join, get_client(), study_id, form.member_id.data, accept)
        log_user_action(current_app.logger, 'accept' if accept else 'reject', study_id, result)
        _flash_result(result)
    else:
        flash('잘못된 요청입니다.', 'error')
    return redirect(url_for('mypage.index', tab=REQUEST_JOIN))


# ====== 마감 / 삭제 ======
@bp.route('/finish/<int:study_id>/', methods=('POST',))
@login_required
def finish(study_id):
    form = ConfirmForm()
    if not form.confirmed:
        return _confirm_page(form, '스터디 마감', '스터디를 마감하시겠습니까?', '마감')

    result = in_flight.run(_in_flight_key('finish', study_id), finish_study, get_client(), study_id, True)
    log_user_action(current_app.logger, 'finish', study_id, result)
    _flash_result(result)
    return redirect(url_for('study.detail', study_id=study_id))


@bp.route('/delete/<int:study_id>/', methods=('POST',))
@login_required
def delete(study_id):
    form = ConfirmForm()
    if not form.confirmed:
        return _confirm_page(form, '스터디 삭제', '정말로 이 스터디를 삭제하시겠습니까?', '삭제')

    result = in_flight.run(_in_flight_key('delete', study_id), delete_study, get_client(), study_id, True)
    log_user_action(current_app.logger, 'delete', study_id, result)
    _flash_result(result)
    if result.ok:
        return redirect(url_for('main.home'))
    return redirect(url_for('study.detail', study_id=study_id))
