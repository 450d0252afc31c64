# api/config.py
import logging
import os

from dotenv import load_dotenv
load_dotenv()

DATABASE = os.getenv("DATABASE", "sqlite:///./earthquakes.db")
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT = int(os.getenv("PORT", "4000"))


def api_key():
    # read per request
    return os.getenv("API_KEY") or None


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
