from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class DeviceConfig:
    """Domain entity: one configured biometric terminal."""

    prefix: str
    name: str
    model: str
    ip: str
    port: int
    location: str
    country: str
    description: str
    timeout: int = 10000
    inport: str = "4000"
    password: int = 0

    def to_dict(self) -> dict:
        return {
            "id": self.prefix,
            "prefix": self.prefix,
            "name": self.name,
            "model": self.model,
            "location": self.location,
            "country": self.country,
            "description": self.description,
            "ip": self.ip,
            "port": self.port,
            "timeout": self.timeout,
            "inport": self.inport,
        }

    def to_public_dict(self) -> dict:
        """Same as ``to_dict`` without network details."""
        return {
            "id": self.prefix,
            "prefix": self.prefix,
            "name": self.name,
            "model": self.model,
            "location": self.location,
            "country": self.country,
            "description": self.description,
        }


@dataclass(frozen=True)
class DeviceUser:
    uid: int
    user_id: str
    name: str
    privilege: int = 0
    card: int = 0


@dataclass(frozen=True)
class AttendanceLog:
    """A single punch read from a device."""

    user_sn: int
    device_user_id: str
    record_time: datetime
    device_ip: Optional[str] = None
    employee_name: Optional[str] = None
    employee_role: int = 0
    employee_card_no: int = 0
    status: int = 0
    punch: int = 0

    def to_dict(self) -> dict:
        return {
            "userSn": self.user_sn,
            "deviceUserId": self.device_user_id,
            "recordTime": self.record_time.isoformat(),
            "ip": self.device_ip,
            "employeeName": self.employee_name,
            "employeeRole": self.employee_role,
            "employeeCardNo": self.employee_card_no,
            "status": self.status,
            "punch": self.punch,
        }
