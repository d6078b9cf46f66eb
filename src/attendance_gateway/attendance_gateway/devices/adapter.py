from __future__ import annotations

from typing import Callable, Protocol, Sequence

from .model import AttendanceLog, DeviceConfig, DeviceUser


class DeviceAdapter(Protocol):
    """Translates generic queries into one device's protocol calls."""

    def ping(self) -> bool:
        raise NotImplementedError

    def get_info(self) -> dict:
        raise NotImplementedError

    def get_users(self) -> Sequence[DeviceUser]:
        raise NotImplementedError

    def get_attendance(self) -> Sequence[AttendanceLog]:
        raise NotImplementedError


AdapterFactory = Callable[[DeviceConfig], DeviceAdapter]
