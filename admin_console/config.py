# config.py
import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    # Backend
    API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:5000/api")
    REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "8"))

    # Session / cookie holding the bearer token
    SECRET_KEY = os.getenv("CONSOLE_SECRET", "dev")
    TOKEN_COOKIE = os.getenv("TOKEN_COOKIE", "token")
    SESSION_COOKIE_SAMESITE = "Lax"

    # Listing
    PAGE_SIZE = int(os.getenv("PAGE_SIZE", "10"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
