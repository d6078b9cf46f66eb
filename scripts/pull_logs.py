"""Pull attendance logs from one configured device and print a sample.

Usage: python -m scripts.pull_logs [prefix] [--limit N]
"""

from __future__ import annotations

import argparse
import importlib
import logging
import os
import sys

from dotenv import load_dotenv

from config import get_settings_module

from src.attendance_gateway.attendance_gateway.common.logging import configure_logging
from src.attendance_gateway.attendance_gateway.core.exceptions import DomainError
from src.attendance_gateway.attendance_gateway.devices.registry import DeviceRegistry, load_devices_from_env
from src.attendance_gateway.attendance_gateway.devices.zk_adapter import ZKDeviceAdapter

logger = logging.getLogger("pull_logs")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("prefix", nargs="?", default="pk01", help="device prefix, e.g. pk01")
    parser.add_argument("--limit", type=int, default=5, help="how many records to print")
    args = parser.parse_args(argv)

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    try:
        registry = DeviceRegistry(load_devices_from_env(os.environ))
        device = registry.require(args.prefix)
        adapter = ZKDeviceAdapter(
            device,
            max_retries=settings.DEVICE_MAX_RETRIES,
            retry_delay=settings.DEVICE_RETRY_DELAY,
        )
        info = adapter.get_info()
        logs = adapter.get_attendance()
    except (ValueError, DomainError) as exc:
        logger.error("%s", exc)
        return 1

    print(f"Device {device.prefix} ({device.ip}:{device.port})")
    for key, value in info.items():
        print(f"  {key}: {value}")
    print(f"Total logs: {len(logs)}")
    for log in logs[-args.limit:]:
        print(f"  {log.record_time:%Y-%m-%d %H:%M:%S}  {log.device_user_id:>6}  {log.employee_name}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
