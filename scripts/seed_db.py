from __future__ import annotations

import importlib

from dotenv import load_dotenv

from attendance_tracker.database.bootstrap import DEMO_USER, ensure_demo_user
from attendance_tracker.settings import get_settings_module


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    ensure_demo_user(db_config)

    print(f"OK: Demo login {DEMO_USER['email']} / {DEMO_USER['password']} -> {db_config.get('database')}")


if __name__ == "__main__":
    main()
