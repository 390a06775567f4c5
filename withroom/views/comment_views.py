from flask import Blueprint, url_for, request, render_template, g, flash, current_app
from werkzeug.utils import redirect

from withroom import in_flight
from withroom.actions import create_comment, delete_comment
from withroom.forms import CommentForm, ConfirmForm
from withroom.logging_setup import log_user_action
from .auth_views import login_required, get_client

bp = Blueprint('comment', __name__, url_prefix='/comment')


# 댓글 등록/삭제 후에는 상세 화면으로 돌아가 댓글 목록을 서버에서 다시 받는다
@bp.route('/create/<int:study_id>/', methods=('POST',))
@login_required
def create(study_id):
    form = CommentForm()
    if form.validate_on_submit():
        result = in_flight.run((g.auth.token, 'comment-create', study_id),
                               create_comment, get_client(), study_id, form.content.data, form.anonymous.data)
        log_user_action(current_app.logger, 'comment-create', study_id, result)
        flash(result.message, result.flash_category)
    else:
        for field, errors in form.errors.items():
            for error in errors:
                flash(error, 'error')
    return redirect(url_for('study.detail', study_id=study_id))


@bp.route('/delete/<int:comment_id>/', methods=('POST',))
@login_required
def delete(comment_id):
    form = ConfirmForm()
    study_id = request.args.get('study_id', type=int)
    if not form.confirmed:
        form.confirm.data = 'yes'
        cancel_url = url_for('study.detail', study_id=study_id) if study_id else url_for('main.home')
        return render_template('confirm.html', form=form, title='댓글 삭제', text='삭제하시겠습니까?',
                               confirm_label='삭제', action_url=request.full_path, cancel_url=cancel_url)

    result = in_flight.run((g.auth.token, 'comment-delete', comment_id),
                           delete_comment, get_client(), comment_id, True)
    log_user_action(current_app.logger, 'comment-delete', study_id, result)
    flash(result.message, result.flash_category)
    if study_id:
        return redirect(url_for('study.detail', study_id=study_id))
    return redirect(url_for('main.home'))
