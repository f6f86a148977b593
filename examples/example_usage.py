"""Example: drive the session engine without Flask.

Activates a user and prints the reconciled status. While the user is checked in,
each countdown tick is printed as HH:MM:SS for a few seconds.
"""

import importlib
import time

from config import get_settings_module

from src.attendance_session.attendance_session.common.datetime_utils import format_hms
from src.attendance_session.attendance_session.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        api_base_url=settings.API_BASE_URL,
        api_token=settings.API_TOKEN,
        on_tick=lambda remaining: print(f"remaining {format_hms(remaining)}"),
    )
    with container.session_controller as controller:
        print(controller.activate("1").as_dict())
        time.sleep(3)
        print(controller.current_status().remaining_display)


if __name__ == "__main__":
    main()
