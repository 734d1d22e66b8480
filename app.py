import logging
from datetime import datetime, timezone

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from config import Config, check_config
from controllers.game_controller import router as game_routes
from database import Base, SessionLocal, engine
from services.ai_service import AIService, OpenAIMoveOracle
from services.errors import GameError
from services.game_repository import GameRepository
from services.game_service import GameService

logger = logging.getLogger(__name__)


def build_game_service():
    check_config()
    Base.metadata.create_all(bind=engine)
    oracle = OpenAIMoveOracle(api_key=Config.OPENAI_API_KEY)
    return GameService(AIService(oracle), GameRepository(SessionLocal))


def create_app(game_service=None):
    logging.basicConfig(level=Config.LOG_LEVEL)

    app = Flask(__name__)
    CORS(app, origins=Config.CORS_ORIGIN)
    app.extensions["game_service"] = game_service or build_game_service()
    app.register_blueprint(game_routes, url_prefix="/api/game")

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()})

    @app.errorhandler(GameError)
    def handle_game_error(e):
        return jsonify({"message": e.message}), e.status_code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        if isinstance(e, HTTPException):
            return e
        logger.exception("Unhandled error")
        return jsonify({"error": {"message": str(e) or "Internal server error"}}), 500

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(port=Config.PORT, debug=Config.APP_ENV == "development")
