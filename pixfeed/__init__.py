# pixfeed/__init__.py

# =====================================================================================
# 1. 환경 변수 로드 (가장 먼저 실행)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. 모듈 임포트 (Module Imports)
# =====================================================================================
import os
import logging
from flask import Flask, jsonify
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException
import firebase_admin
from firebase_admin import credentials, firestore

# - 설정
from pixfeed.core.config import config_by_name
from pixfeed.core.exceptions import ApiError, validation_error_response, internal_error_response

# - API 블루프린트
from pixfeed.api.users.routes import users_bp
from pixfeed.api.posts.routes import posts_bp
from pixfeed.api.comments.routes import comments_bp
from pixfeed.api.uploads.routes import uploads_bp

# - 서비스 모듈
from pixfeed.services.storage_service import StorageService
from pixfeed.api.users.services import UserService
from pixfeed.api.posts.services import PostService
from pixfeed.api.comments.services import CommentService


def _init_firestore(app: Flask):
    """firebase_admin 앱을 (한 번만) 초기화하고 Firestore 클라이언트를 반환합니다."""
    if not firebase_admin._apps:
        cred_path = app.config['FIREBASE_CREDENTIALS_PATH']
        if not cred_path or not os.path.exists(cred_path):
            raise FileNotFoundError(f"Firebase 인증 파일을 찾을 수 없습니다: {cred_path}")
        cred = credentials.Certificate(cred_path)
        options = {}
        if app.config.get('FIREBASE_PROJECT_ID'):
            options['projectId'] = app.config['FIREBASE_PROJECT_ID']
        firebase_admin.initialize_app(cred, options)
    return firestore.client()


def create_app(config_name=None, db=None, test_config=None):
    """
    Flask 애플리케이션 팩토리 함수.

    :param config_name: 'development' | 'testing' | 'production' (기본값: FLASK_ENV)
    :param db: 미리 만들어 둔 Firestore 클라이언트. 주어지면 firebase_admin 초기화를 건너뜁니다.
    :param test_config: 설정 클래스 위에 덮어쓸 설정 값 딕셔너리
    """
    # =====================================================================================
    # 3. Flask 앱 생성 및 기본 설정
    # =====================================================================================
    config_name = config_name or os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    if test_config:
        app.config.update(test_config)
    app.json.ensure_ascii = False

    # =====================================================================================
    # 4. 외부 서비스 초기화
    # =====================================================================================
    if db is None:
        db = _init_firestore(app)

    # =====================================================================================
    # 5. 서비스 인스턴스 생성 및 'app.services'에 저장 (의존성 주입)
    # =====================================================================================
    app.services = {}

    try:
        storage_instance = StorageService()
        storage_instance.init_app(app)
        app.services['storage'] = storage_instance
    except Exception as e:
        logging.error(f"Failed to initialize storage service: {e}")
        raise

    app.services['users'] = UserService(db, storage_service=app.services['storage'])
    app.services['posts'] = PostService(
        db,
        storage_service=app.services['storage'],
        user_service=app.services['users']
    )
    app.services['comments'] = CommentService(db, user_service=app.services['users'])

    # =====================================================================================
    # 6. 블루프린트 등록
    # =====================================================================================
    app.register_blueprint(users_bp)
    app.register_blueprint(posts_bp)
    app.register_blueprint(comments_bp)
    app.register_blueprint(uploads_bp, url_prefix='/uploads')

    # =====================================================================================
    # 7. 전역 에러 핸들러 설정
    # =====================================================================================
    @app.errorhandler(ApiError)
    def handle_api_error(err):
        return err.to_response()

    @app.errorhandler(ValidationError)
    def handle_marshmallow_validation(err):
        return validation_error_response(err)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err):
        # 404/405 등 werkzeug 예외도 HTML 대신 JSON으로 응답
        if err.code is None or err.code < 400:
            return err
        response = {"success": False, "error_code": err.name.upper().replace(' ', '_'), "error": err.description}
        return jsonify(response), err.code

    @app.errorhandler(Exception)
    def handle_generic_exception(err):
        # 다른 핸들러에서 처리되지 않은 모든 예외를 여기서 처리
        logging.error(f"An unhandled exception occurred: {err}", exc_info=True)
        return internal_error_response()

    # =====================================================================================
    # 8. 로깅 및 앱 반환
    # =====================================================================================
    if not app.debug:
        logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]')

    logging.info(f"Flask app created for '{config_name}' environment.")

    return app
