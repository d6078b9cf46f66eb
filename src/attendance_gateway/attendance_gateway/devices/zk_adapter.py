from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, Sequence

from zk import ZK
from zk.exception import ZKError

from ..core.constants import MAX_BACKOFF_SECONDS, MIN_ACCEPTED_RECORDS
from ..core.exceptions import DeviceConnectionError
from .model import AttendanceLog, DeviceConfig, DeviceUser

logger = logging.getLogger(__name__)


def describe_connection_error(error: BaseException) -> str:
    message = str(error) or error.__class__.__name__
    lowered = message.lower()
    if "refused" in lowered:
        return "Connection refused - device may be offline or port blocked"
    if "timed out" in lowered or "timeout" in lowered:
        return "Device connection timeout"
    if "unreachable" in lowered:
        return "Network unreachable - routing issue"
    if "name or service not known" in lowered or "nodename" in lowered:
        return "DNS resolution failed - device IP not found"
    return message


@contextmanager
def device_connection(zk: ZK, *, disable: bool = True) -> Iterator:
    """Open a pyzk connection; the device is re-enabled and released on exit."""
    conn = zk.connect()
    try:
        if disable:
            conn.disable_device()
        yield conn
    finally:
        try:
            if disable:
                conn.enable_device()
            conn.disconnect()
        except (ZKError, OSError) as exc:
            logger.warning("Could not disconnect cleanly: %s", exc)


class ZKDeviceAdapter:
    """DeviceAdapter backed by the ZKTeco binary protocol (pyzk)."""

    def __init__(
        self,
        device: DeviceConfig,
        *,
        max_retries: int = 3,
        retry_delay: float = 2.0,
        sleep: Callable[[float], None] = time.sleep,
        zk_factory: Optional[Callable[[DeviceConfig], ZK]] = None,
    ):
        self._device = device
        self._max_retries = max(1, int(max_retries))
        self._retry_delay = float(retry_delay)
        self._sleep = sleep
        self._zk_factory = zk_factory or self._build_zk

    @staticmethod
    def _build_zk(device: DeviceConfig) -> ZK:
        return ZK(
            device.ip,
            port=int(device.port),
            timeout=max(1, int(device.timeout) // 1000),
            password=int(device.password),
            force_udp=False,
            ommit_ping=True,
        )

    @contextmanager
    def _connect(self, *, disable: bool = True):
        zk = self._zk_factory(self._device)
        try:
            with device_connection(zk, disable=disable) as conn:
                yield conn
        except (ZKError, OSError) as exc:
            raise DeviceConnectionError(self._device.prefix, describe_connection_error(exc)) from exc

    def ping(self) -> bool:
        try:
            with self._connect(disable=False):
                return True
        except DeviceConnectionError:
            return False

    def get_info(self) -> dict:
        with self._connect(disable=False) as conn:
            conn.read_sizes()
            return {
                "deviceName": conn.get_device_name(),
                "firmware": conn.get_firmware_version(),
                "serialNumber": conn.get_serialnumber(),
                "platform": conn.get_platform(),
                "mac": conn.get_mac(),
                "deviceTime": conn.get_time().isoformat(),
                "userCounts": conn.users,
                "userCapacity": conn.users_cap,
                "logCounts": conn.records,
                "logCapacity": conn.rec_cap,
            }

    def get_users(self) -> Sequence[DeviceUser]:
        with self._connect() as conn:
            return [self._to_user(u) for u in conn.get_users() or []]

    def get_attendance(self) -> Sequence[AttendanceLog]:
        prefix = self._device.prefix
        best: list[AttendanceLog] = []
        last_error: Optional[str] = None

        for attempt in range(1, self._max_retries + 1):
            logger.info("Fetching attendance logs (attempt %s/%s)", attempt, self._max_retries, extra={"device": prefix})
            try:
                logs = self._read_enriched()
            except DeviceConnectionError as exc:
                last_error = exc.reason
                logger.warning("Attendance read failed: %s", exc.reason, extra={"device": prefix})
            else:
                if len(logs) >= MIN_ACCEPTED_RECORDS:
                    logger.info("Retrieved %s attendance records", len(logs), extra={"device": prefix})
                    return logs
                last_error = f"Very low data: only {len(logs)} records retrieved"
                if len(logs) > len(best):
                    best = logs

            if attempt < self._max_retries:
                self._sleep(min(self._retry_delay * (2 ** (attempt - 1)), MAX_BACKOFF_SECONDS))

        if best:
            logger.warning("Returning best available data: %s records", len(best), extra={"device": prefix})
            return best
        if last_error and last_error.startswith("Very low data"):
            # Device answered every time but holds no logs.
            return []
        raise DeviceConnectionError(
            prefix, f"Failed after {self._max_retries} attempts. Last error: {last_error or 'Unknown error'}"
        )

    def _read_enriched(self) -> list[AttendanceLog]:
        with self._connect() as conn:
            raw_logs = conn.get_attendance() or []
            try:
                users = {str(u.user_id): u for u in conn.get_users() or []}
            except (ZKError, OSError) as exc:
                logger.warning("get_users failed, returning logs without names: %s", exc,
                               extra={"device": self._device.prefix})
                users = None

        logs = []
        for rec in raw_logs:
            user = users.get(str(rec.user_id)) if users is not None else None
            if users is None:
                name = None
            elif user is None:
                name = "Unknown Employee"
            else:
                name = user.name or "Unknown"
            logs.append(
                AttendanceLog(
                    user_sn=int(getattr(rec, "uid", 0) or 0),
                    device_user_id=str(rec.user_id),
                    record_time=rec.timestamp,
                    device_ip=self._device.ip,
                    employee_name=name,
                    employee_role=int(user.privilege or 0) if user else 0,
                    employee_card_no=int(user.card or 0) if user else 0,
                    status=int(getattr(rec, "status", 0) or 0),
                    punch=int(getattr(rec, "punch", 0) or 0),
                )
            )
        return logs

    @staticmethod
    def _to_user(u) -> DeviceUser:
        return DeviceUser(
            uid=int(u.uid),
            user_id=str(u.user_id),
            name=u.name or "Unknown",
            privilege=int(u.privilege or 0),
            card=int(u.card or 0),
        )


def zk_adapter_factory(*, max_retries: int = 3, retry_delay: float = 2.0):
    def build(device: DeviceConfig) -> ZKDeviceAdapter:
        return ZKDeviceAdapter(device, max_retries=max_retries, retry_delay=retry_delay)

    return build
