"""
로그 로테이션 및 레벨 설정

개발/프로덕션 환경에 따라 로그 레벨을 전환하고,
백엔드 API 호출 기록을 남긴다.
"""

import os
import logging
from logging.handlers import RotatingFileHandler


def setup_logging(app):
    """
    Flask 앱 로깅 설정

    Args:
        app (Flask): Flask 앱 객체

    Note:
        - 개발 환경 (FLASK_ENV=development): DEBUG 레벨
        - 프로덕션 환경 (그 외): INFO 레벨
        - 로그 로테이션: 10MB × 5개 백업
        - withroom.* 모듈 로거는 app.logger(이름 'withroom')로 전파된다
    """
    log_dir = app.config['LOG_DIR']
    os.makedirs(log_dir, exist_ok=True)

    if app.config.get('FLASK_ENV') == 'development':
        log_level = logging.DEBUG
    else:
        log_level = logging.INFO

    # 테스트 등에서 create_app을 여러 번 호출해도 핸들러가 중복되지 않도록
    for handler in list(app.logger.handlers):
        if getattr(handler, '_withroom_handler', False):
            app.logger.removeHandler(handler)
            handler.close()

    file_handler = RotatingFileHandler(
        os.path.join(log_dir, app.config['LOG_FILE']),
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    file_handler._withroom_handler = True

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(log_level)

    app.logger.addHandler(file_handler)
    app.logger.setLevel(log_level)

    app.logger.info('WITH ROOM client starting')
    app.logger.info(f'Log level: {logging.getLevelName(log_level)}')
    app.logger.info(f'Backend: {app.config["API_BASE_URL"]}')


def log_api_call(logger, method, path, status, elapsed):
    """
    백엔드 API 호출 로그 기록

    Example:
        >>> log_api_call(logger, "POST", "/study/join", 200, 0.12)
        # 로그: INFO - API Call: POST /study/join | Status: 200 | 0.120s
    """
    level = logging.INFO if 200 <= status < 300 else logging.WARNING
    logger.log(level, f"API Call: {method} {path} | Status: {status} | {elapsed:.3f}s")


def log_user_action(logger, action, study_id, result):
    """사용자 액션(참여, 관심, 수락 등) 결과 기록"""
    logger.info(f"User Action: {action} | Study: {study_id} | Result: {result.category}")
