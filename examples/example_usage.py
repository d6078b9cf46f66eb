"""Example: using the service layer without Flask.

Controllers stay thin; the shift rules live in services and can be driven directly.
"""

import importlib
import os
from datetime import datetime

from dotenv import load_dotenv

from config import get_settings_module

from src.attendance_gateway.attendance_gateway.container import build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings=settings, environ=os.environ)

    print(container.device_service.list_devices()["summary"])

    sample = [
        {"deviceUserId": "101", "employeeName": "Ayesha", "recordTime": "2024-01-15T18:05:00"},
        {"deviceUserId": "101", "employeeName": "Ayesha", "recordTime": "2024-01-16T02:10:00"},
        {"deviceUserId": "102", "employeeName": "Bilal", "recordTime": "2024-01-15T19:00:00"},
    ]
    first = container.registry.list_all()[0].prefix
    result = container.shift_service.process_records(
        first,
        sample,
        now=datetime(2024, 1, 16, 9, 0),
    )
    for row in result["data"]:
        print(row["deviceUserId"], row["employeeName"], row["shiftStatus"])


if __name__ == "__main__":
    main()
