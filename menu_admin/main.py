"""Entry point for the menu-admin Textual app."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from menu_admin.admin_app import MenuAdminApp
from menu_admin.collection import MenuCollection
from menu_admin.config import (
    DEBUG_LOG_PATH,
    IMAGE_BUCKET,
    MENU_TABLE,
    REMOTE_TIMEOUT_SECONDS,
    SUPABASE_KEY,
    SUPABASE_URL,
)
from menu_admin.store import SupabaseMenuStore
from menu_admin.uploader import SupabaseImageUploader


def configure_logging(path: str = DEBUG_LOG_PATH) -> None:
    """Send log records to a file so they never draw over the terminal UI."""
    log_file = Path(path)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    root = logging.getLogger("menu_admin")
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)


def build_app() -> MenuAdminApp:
    store = SupabaseMenuStore(SUPABASE_URL, SUPABASE_KEY, MENU_TABLE)
    uploader = SupabaseImageUploader(SUPABASE_URL, SUPABASE_KEY, IMAGE_BUCKET)
    return MenuAdminApp(MenuCollection(store, timeout=REMOTE_TIMEOUT_SECONDS), uploader=uploader)


def main() -> None:
    """Run the Textual application."""
    if not SUPABASE_URL or not SUPABASE_KEY:
        sys.exit("SUPABASE_URL and SUPABASE_KEY must be set (environment or .env).")
    configure_logging()
    build_app().run()


if __name__ == "__main__":
    main()
