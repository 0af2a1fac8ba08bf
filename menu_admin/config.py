"""Runtime configuration defaults for the remote store and logging."""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

SUPABASE_URL = os.getenv("SUPABASE_URL", "")
SUPABASE_KEY = os.getenv("SUPABASE_KEY", "")

MENU_TABLE = os.getenv("MENU_TABLE", "menu_items")
IMAGE_BUCKET = os.getenv("IMAGE_BUCKET", "menu-images")

# Remote round trips that take longer than this are treated as failed saves.
REMOTE_TIMEOUT_SECONDS = float(os.getenv("REMOTE_TIMEOUT_SECONDS", "10"))

DEBUG_LOG_PATH = os.getenv("DEBUG_LOG_PATH", "/tmp/menu-admin-debug.log")
