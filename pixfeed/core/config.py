# pixfeed/core/config.py

import os # 환경 변수를 읽기 위해 사용합니다.

class Config:
    """모든 환경 설정의 기반이 되는 공통 설정 클래스입니다."""
    # Firestore 접속에 사용할 서비스 계정 키 파일 경로입니다. (DB 연결 정보)
    FIREBASE_CREDENTIALS_PATH = os.getenv('FIREBASE_CREDENTIALS_PATH')
    # 서비스 계정과 다른 프로젝트를 사용할 때만 지정합니다.
    FIREBASE_PROJECT_ID = os.getenv('FIREBASE_PROJECT_ID')

    # 업로드된 프로필 사진/게시물 이미지가 저장되는 로컬 디렉터리입니다.
    UPLOAD_FOLDER = os.getenv('UPLOAD_FOLDER', 'uploads')
    # Flask가 요청 본문 크기를 제한하는 데 사용하는 값입니다. (기본 10MB)
    MAX_CONTENT_LENGTH = int(os.getenv('MAX_CONTENT_LENGTH', 10 * 1024 * 1024))

    # bcrypt 해시 비용 계수
    BCRYPT_ROUNDS = int(os.getenv('BCRYPT_ROUNDS', 10))

    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 3001))

class DevelopmentConfig(Config):
    """개발 환경을 위한 설정 클래스입니다."""
    DEBUG = True

class TestingConfig(Config):
    """테스트 환경을 위한 설정 클래스입니다."""
    TESTING = True
    DEBUG = False
    # 테스트에서는 해시 속도를 위해 최소 비용을 사용합니다.
    BCRYPT_ROUNDS = 4

class ProductionConfig(Config):
    """운영 환경 설정 클래스입니다."""
    DEBUG = False
    HOST = os.getenv('HOST', '0.0.0.0')

# config_by_name: FLASK_ENV 값과 설정 클래스를 매핑합니다. create_app에서 사용합니다.
config_by_name = dict(
    development=DevelopmentConfig,
    testing=TestingConfig,
    production=ProductionConfig
)
