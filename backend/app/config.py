# backend/app/config.py
"""Application configuration via environment variables."""

import os
from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# SERVICE
# =============================================================================

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

# SQLite by default; any SQLAlchemy URL works (postgresql+psycopg://, mssql+pyodbc://)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./floor_plans.db")

CORS_ORIGINS = os.getenv(
    "CORS_ORIGINS", "http://localhost:3000,http://localhost:5173"
).split(",")

# =============================================================================
# FLOOR PLAN CANVAS (virtual units)
# =============================================================================

CANVAS_W = int(os.getenv("FLOOR_PLAN_CANVAS_W", "800"))
CANVAS_H = int(os.getenv("FLOOR_PLAN_CANVAS_H", "600"))
GRID = int(os.getenv("FLOOR_PLAN_GRID", "10"))
MIN_SIZE = int(os.getenv("FLOOR_PLAN_MIN_SIZE", "40"))
HANDLE = int(os.getenv("FLOOR_PLAN_HANDLE", "14"))

# Drawn rectangles at or below this size are gesture noise
MIN_DRAW_SIZE = int(os.getenv("FLOOR_PLAN_MIN_DRAW_SIZE", "20"))

# Quiet period before a layout change reaches the persistence boundary (seconds)
NOTIFY_DELAY = float(os.getenv("FLOOR_PLAN_NOTIFY_DELAY", "0.2"))

# Auto-layout width jitter (0 disables) and its seed
LAYOUT_JITTER = float(os.getenv("FLOOR_PLAN_JITTER", "0.15"))
LAYOUT_SEED = int(os.getenv("FLOOR_PLAN_SEED", "42"))

# =============================================================================
# UPLOADS
# =============================================================================

MAX_BACKGROUND_IMAGE_SIZE = int(os.getenv("MAX_BACKGROUND_IMAGE_SIZE", str(10 * 1024 * 1024)))
