"""
Runtime configuration for the Portfolio Builder API.

Values come from the process environment; a local .env file is loaded first
so development setups don't need to export anything.
"""
import logging
import os
import sys

from dotenv import load_dotenv

load_dotenv()

API_VERSION = "2.0.0"

DATABASE_URL = os.getenv("DATABASE_URL") or os.getenv("MONGODB_URI") or "mongodb://localhost:27017"
DATABASE_NAME = os.getenv("DATABASE_NAME", "portfolio_builder")
SERVER_SELECTION_TIMEOUT_MS = int(os.getenv("SERVER_SELECTION_TIMEOUT_MS", "2000"))
READINESS_CACHE_SECONDS = float(os.getenv("READINESS_CACHE_SECONDS", "5"))

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Placeholder login, not a user store.
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "password123")


def configure_logging(level: str = LOG_LEVEL):
    root = logging.getLogger()
    if any(getattr(h, "_portfolio", False) for h in root.handlers):
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    handler._portfolio = True
    root.addHandler(handler)
    root.setLevel(level)
