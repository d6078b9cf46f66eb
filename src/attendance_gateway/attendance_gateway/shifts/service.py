from __future__ import annotations

import logging
from datetime import datetime
from typing import Mapping, Optional, Sequence

from ..attendance.service import AttendanceService
from ..common.datetime_utils import now_local, parse_record_time
from ..core.exceptions import DomainError, ValidationError
from ..devices.model import AttendanceLog
from ..devices.registry import DeviceRegistry
from . import processor
from .model import ShiftConfig

logger = logging.getLogger(__name__)


def build_shift_configs(registry: DeviceRegistry, environ: Mapping[str, str]) -> dict[str, ShiftConfig]:
    configs = {}
    for device in registry.list_all():
        configs[device.prefix] = ShiftConfig.from_env(device.prefix, environ)
        logger.info("Shift configuration loaded", extra={"device": device.prefix})
    return configs


class ShiftService:
    def __init__(
        self,
        registry: DeviceRegistry,
        attendance: AttendanceService,
        configs: Mapping[str, ShiftConfig] | None = None,
    ):
        self._registry = registry
        self._attendance = attendance
        self._configs = dict(configs or {})

    def config_for(self, prefix: str) -> ShiftConfig:
        self._registry.require(prefix)
        return self._configs.get(prefix) or ShiftConfig()

    def get_config(self, prefix: str) -> dict:
        return self.config_for(prefix).to_dict()

    def _header(self, prefix: str, config: ShiftConfig, now: datetime, *fields: str) -> dict:
        shown = config.to_dict()
        if fields:
            shown = {k: shown[k] for k in fields}
        shown["currentTime"] = now.isoformat()
        shown["currentHour"] = now.hour
        return {"devicePrefix": prefix, "shiftConfig": shown}

    def _evaluate(self, prefix: str, records: Sequence[AttendanceLog], config: ShiftConfig, now: datetime) -> dict:
        rows = processor.process_shift(records, config, now)
        result = self._header(prefix, config, now)
        result["shiftPeriod"] = processor.shift_period(config, now)
        result["data"] = rows
        result["summary"] = processor.summarize(rows)
        return result

    def get_today_shift(self, prefix: str, *, now: Optional[datetime] = None) -> dict:
        config = self.config_for(prefix)
        now = now or now_local()
        return self._evaluate(prefix, self._attendance.fetch_logs(prefix), config, now)

    def get_shift_checkin(self, prefix: str, *, now: Optional[datetime] = None) -> dict:
        config = self.config_for(prefix)
        now = now or now_local()
        result = self._header(prefix, config, now, "checkInBufferStart", "checkInBufferEnd")
        result["data"] = processor.process_check_ins(self._attendance.fetch_logs(prefix), config, now)
        return result

    def get_shift_checkout(self, prefix: str, *, now: Optional[datetime] = None) -> dict:
        config = self.config_for(prefix)
        now = now or now_local()
        result = self._header(prefix, config, now, "checkOutBufferStart", "checkOutBufferEnd")
        result["data"] = processor.process_check_outs(self._attendance.fetch_logs(prefix), config, now)
        return result

    def get_all_devices_shift(self, *, now: Optional[datetime] = None) -> dict:
        now = now or now_local()
        results = {}
        for device in self._registry.list_all():
            try:
                results[device.prefix] = {"success": True, **self.get_today_shift(device.prefix, now=now)}
            except DomainError as exc:
                logger.error("Failed to get shift data: %s", exc, extra={"device": device.prefix})
                results[device.prefix] = {"success": False, "error": str(exc), "devicePrefix": device.prefix}
        return {
            "totalDevices": len(self._registry),
            "successfulDevices": sum(1 for r in results.values() if r["success"]),
            "results": results,
        }

    def process_records(
        self,
        prefix: str,
        records,
        *,
        overrides: Optional[Mapping] = None,
        now: Optional[datetime] = None,
    ) -> dict:
        """Evaluate caller-supplied punches against the device's shift rules."""
        device = self._registry.require(prefix)
        if not isinstance(records, list):
            raise ValidationError("records must be an array")
        config = self.config_for(prefix).with_overrides(overrides)
        now = now or now_local()
        logs = [self._to_log(raw, index, device.ip) for index, raw in enumerate(records)]
        return self._evaluate(prefix, logs, config, now)

    @staticmethod
    def _to_log(raw, index: int, default_ip: str) -> AttendanceLog:
        if not isinstance(raw, Mapping):
            raise ValidationError(f"records[{index}] must be an object")
        user_id = raw.get("deviceUserId")
        if user_id is None or str(user_id).strip() == "":
            raise ValidationError(f"records[{index}].deviceUserId is required")
        try:
            return AttendanceLog(
                user_sn=int(raw.get("userSn") or 0),
                device_user_id=str(user_id),
                record_time=parse_record_time(raw.get("recordTime")),
                device_ip=raw.get("ip") or default_ip,
                employee_name=raw.get("employeeName"),
                employee_role=int(raw.get("employeeRole") or 0),
                employee_card_no=int(raw.get("employeeCardNo") or 0),
            )
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"records[{index}] is invalid: {exc}") from exc
