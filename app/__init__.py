# app/__init__.py

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
from werkzeug.exceptions import HTTPException
from marshmallow import ValidationError
from flask_jwt_extended import JWTManager
import firebase_admin
from firebase_admin import credentials

# - 설정
from app.core.config import config_by_name

# - API 블루프린트
from app.api.auth.routes import auth_bp
from app.api.comments.routes import comments_bp
from app.api.episodes.routes import episodes_bp
from app.api.settings.routes import settings_bp

# - 서비스 모듈
from app.services.story_store import StoryStore
from app.api.auth import services as auth_service_module
from app.api.comments.services import CommentService
from app.api.episodes.services import EpisodeService
from app.api.settings.services import SettingsService

def _init_firebase(app: Flask):
    if firebase_admin._apps:
        return
    cred_path = app.config.get('FIREBASE_CREDENTIALS_PATH')
    if not cred_path or not os.path.exists(cred_path):
        raise FileNotFoundError(f"Firebase 인증 파일을 찾을 수 없습니다: {cred_path}")
    firebase_admin.initialize_app(credentials.Certificate(cred_path))

def create_app(config_name=None, services=None):
    """
    Flask 애플리케이션 팩토리 함수.
    services 를 넘기면 Firebase 초기화를 건너뛰고 해당 서비스 인스턴스를 그대로 사용합니다. (테스트용)
    """
    # =====================================================================================
    # 3. Flask 앱 생성 및 기본 설정
    # =====================================================================================
    config_name = config_name or os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.json.ensure_ascii = False

    # =====================================================================================
    # 4. 확장 기능 및 외부 서비스 초기화
    # =====================================================================================
    jwt = JWTManager(app)

    # =====================================================================================
    # 5. 서비스 인스턴스 생성 및 'app.services'에 저장 (의존성 주입)
    # =====================================================================================
    if services is not None:
        app.services = dict(services)
    else:
        _init_firebase(app)
        app.services = {}

        # 5-1. 다른 서비스의 기반이 되는 공용 저장소 서비스 먼저 생성
        try:
            app.services['story_store'] = StoryStore()
            logging.info("Story store initialized successfully")
        except Exception as e:
            logging.error(f"Failed to initialize story store: {e}")
            raise

        # 5-2. 저장소를 주입받는 도메인 서비스 생성
        app.services['comments'] = CommentService(story_store=app.services['story_store'])
        app.services['episodes'] = EpisodeService(story_store=app.services['story_store'])
        app.services['settings'] = SettingsService()

        # - 인증 서비스 (앱 컨텍스트 필요)
        auth_service_module.auth_service.init_app(app)
        app.services['auth'] = auth_service_module.auth_service

    @jwt.token_in_blocklist_loader
    def check_if_token_revoked(jwt_header, jwt_payload):
        auth_service = app.services.get('auth')
        return bool(auth_service) and auth_service.is_token_revoked(jwt_payload)

    # =====================================================================================
    # 6. 블루프린트 등록
    # =====================================================================================
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(comments_bp, url_prefix='/api/stories')
    app.register_blueprint(episodes_bp, url_prefix='/api/stories')
    app.register_blueprint(settings_bp, url_prefix='/api/settings')

    # =====================================================================================
    # 7. 전역 에러 핸들러 설정
    # =====================================================================================
    @app.errorhandler(ValidationError)
    def handle_marshmallow_validation(err):
        response = {"error_code": "VALIDATION_ERROR", "details": err.messages}
        return jsonify(response), 400

    @app.errorhandler(HTTPException)
    def handle_http_exception(err):
        # 404, 405 등 Werkzeug HTTP 예외는 상태 코드를 그대로 유지합니다.
        response = {"error_code": err.name.upper().replace(" ", "_"), "message": err.description}
        return jsonify(response), err.code

    @app.errorhandler(Exception)
    def handle_generic_exception(err):
        # 다른 핸들러에서 처리되지 않은 모든 예외를 여기서 처리
        logging.error(f"An unhandled exception occurred: {err}", exc_info=True)
        response = {"error_code": "INTERNAL_SERVER_ERROR", "message": "서버 내부에서 예상치 못한 오류가 발생했습니다."}
        return jsonify(response), 500

    # =====================================================================================
    # 8. 로깅 및 앱 반환
    # =====================================================================================
    if not app.debug:
        logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]')

    logging.info(f"Flask app created for '{config_name}' environment.")

    return app
