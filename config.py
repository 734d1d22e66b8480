import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    APP_ENV = os.getenv("APP_ENV", "development")
    PORT = int(os.getenv("PORT", "3000"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGIN = os.getenv("CORS_ORIGIN", "*")

    # Persistence
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///tictactoe.db")
    COMPLETED_GAMES_LIMIT = 100

    # Move oracle
    OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
    OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")
    AI_TIMEOUT_SECONDS = float(os.getenv("AI_TIMEOUT_SECONDS", "10"))

    # Board
    MIN_GRID_SIZE = 3
    MAX_GRID_SIZE = 10
    DEFAULT_HUMAN_SYMBOL = "X"


def check_config(config=Config):
    if not config.OPENAI_API_KEY and config.APP_ENV == "production":
        raise RuntimeError("OPENAI_API_KEY is required in production")
