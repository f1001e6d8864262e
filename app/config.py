# /app/config.py

"""
Runtime configuration for the SkillMap backend.

Values are read from the process environment once, at import time. A local
`.env` file is honoured for development through python-dotenv.
"""

import os
from typing import List

from dotenv import load_dotenv

load_dotenv()

# --- Database ---
# `sqlite://` (no path) selects a private in-memory database, which the test
# suite relies on.
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./skillmap.db")

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- HTTP ---
def _parse_origins(raw: str) -> List[str]:
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or ["*"]

CORS_ORIGINS = _parse_origins(os.getenv("CORS_ORIGINS", "*"))
