import os

from dotenv import load_dotenv

BASE_DIR = os.path.dirname(__file__)

# .env 파일 로드
load_dotenv(os.path.join(BASE_DIR, '.env'))

SECRET_KEY = os.environ.get('SECRET_KEY', 'dev')
FLASK_ENV = os.environ.get('FLASK_ENV', 'production')

# 백엔드 API 설정 (모든 비즈니스 로직은 원격 서버가 처리)
API_BASE_URL = os.environ.get('API_BASE_URL', 'https://withroom.store/api')
API_TIMEOUT = float(os.environ.get('API_TIMEOUT', 5))

# 카카오 로그인 설정
KAKAO_AUTHORIZE_URL = 'https://kauth.kakao.com/oauth/authorize'
KAKAO_REST_API_KEY = os.environ.get('KAKAO_REST_API_KEY', '')
KAKAO_REDIRECT_URI = os.environ.get('KAKAO_REDIRECT_URI', 'https://withroom.store/kakao/callback')

# 로그 설정
LOG_DIR = os.environ.get('LOG_DIR', os.path.join(BASE_DIR, 'logs'))
LOG_FILE = 'withroom.log'

# 페이지 크기
MY_STUDIES_PER_PAGE = 6
MY_STUDIES_PER_PAGE_MOBILE = 4
STUDY_LIST_PER_PAGE = 8
HOME_STUDY_LIMIT = 7

# 스터디 만들기 중 첨부 이미지를 제출 전까지 보관하는 폴더
UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER', os.path.join(BASE_DIR, 'uploads'))
