"""Pure shift evaluation over a list of punches.

A shift that crosses midnight is owned by the day it started on: until the
check-out buffer closes the running shift is yesterday's.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from ..core.enums import ShiftStatus
from ..devices.model import AttendanceLog
from .model import ShiftConfig


def shift_date_for(now: datetime, config: ShiftConfig) -> date:
    if now.hour < config.check_out_buffer_end or (now.hour == 0 and now.minute == 0):
        return now.date() - timedelta(days=1)
    return now.date()


def shift_period(config: ShiftConfig, now: datetime) -> dict:
    day = shift_date_for(now, config)
    next_day = day + timedelta(days=1)
    nominal_end_day = next_day if config.end_hour <= config.start_hour else day
    return {
        "shiftDate": day.isoformat(),
        "start": _at_hour(day, config.check_in_buffer_start).isoformat(),
        "end": _at_hour(next_day, config.check_out_buffer_end).isoformat(),
        "nominalStart": _at_hour(day, config.start_hour).isoformat(),
        "nominalEnd": _at_hour(nominal_end_day, config.end_hour).isoformat(),
        "description": config.description,
    }


def _at_hour(day: date, hour: int) -> datetime:
    # hour 24 means midnight at the end of ``day``
    return datetime.combine(day, datetime.min.time()) + timedelta(hours=hour)


def group_by_employee(records: Sequence[AttendanceLog]) -> dict[str, list[AttendanceLog]]:
    groups: dict[str, list[AttendanceLog]] = {}
    for record in records:
        groups.setdefault(record.device_user_id, []).append(record)
    for items in groups.values():
        items.sort(key=lambda r: r.record_time)
    return groups


def find_check_in(records: Sequence[AttendanceLog], config: ShiftConfig, now: datetime) -> Optional[AttendanceLog]:
    """Latest punch inside the check-in buffer on the shift date."""
    day = shift_date_for(now, config)
    matches = [
        r for r in records
        if r.record_time.date() == day
        and config.check_in_buffer_start <= r.record_time.hour < config.check_in_buffer_end
    ]
    return matches[-1] if matches else None


def find_check_out(records: Sequence[AttendanceLog], config: ShiftConfig, now: datetime) -> Optional[AttendanceLog]:
    """Earliest punch inside the check-out buffer on the day after the shift date."""
    day = shift_date_for(now, config) + timedelta(days=1)
    matches = [
        r for r in records
        if r.record_time.date() == day
        and config.check_out_buffer_start <= r.record_time.hour < config.check_out_buffer_end
    ]
    return matches[0] if matches else None


def shift_status(check_in: Optional[AttendanceLog], check_out: Optional[AttendanceLog]) -> ShiftStatus:
    if check_in and check_out:
        return ShiftStatus.COMPLETED
    if check_in:
        return ShiftStatus.CHECKED_IN
    if check_out:
        return ShiftStatus.CHECKED_OUT
    return ShiftStatus.NOT_STARTED


def format_record(record: AttendanceLog) -> dict:
    dt = record.record_time
    data = record.to_dict()
    data["recordDate"] = dt.strftime("%m/%d/%Y")
    data["recordTimeFormatted"] = dt.strftime("%m/%d/%Y, %I:%M:%S %p")
    data["timeOnly"] = dt.strftime("%I:%M %p")
    return data


def empty_record(base: AttendanceLog) -> dict:
    return {
        "userSn": None,
        "deviceUserId": base.device_user_id,
        "employeeName": base.employee_name,
        "employeeRole": base.employee_role,
        "recordTime": None,
        "recordDate": None,
        "recordTimeFormatted": None,
        "timeOnly": None,
        "ip": base.device_ip,
    }


def process_shift(records: Sequence[AttendanceLog], config: ShiftConfig, now: datetime) -> list[dict]:
    rows = []
    for user_id, items in group_by_employee(records).items():
        check_in = find_check_in(items, config, now)
        check_out = find_check_out(items, config, now)
        rows.append(
            {
                "deviceUserId": user_id,
                "employeeName": items[0].employee_name,
                "employeeRole": items[0].employee_role,
                "totalRecords": len(items),
                "shiftCheckIn": format_record(check_in) if check_in else None,
                "shiftCheckOut": format_record(check_out) if check_out else None,
                "shiftStatus": shift_status(check_in, check_out).value,
            }
        )
    return rows


def process_check_ins(records: Sequence[AttendanceLog], config: ShiftConfig, now: datetime) -> list[dict]:
    rows = []
    for user_id, items in group_by_employee(records).items():
        check_in = find_check_in(items, config, now)
        rows.append(
            {
                "deviceUserId": user_id,
                "employeeName": items[0].employee_name,
                "employeeRole": items[0].employee_role,
                "checkIn": format_record(check_in) if check_in else empty_record(items[0]),
            }
        )
    return rows


def process_check_outs(records: Sequence[AttendanceLog], config: ShiftConfig, now: datetime) -> list[dict]:
    rows = []
    for user_id, items in group_by_employee(records).items():
        check_out = find_check_out(items, config, now)
        rows.append(
            {
                "deviceUserId": user_id,
                "employeeName": items[0].employee_name,
                "employeeRole": items[0].employee_role,
                "checkOut": format_record(check_out) if check_out else empty_record(items[0]),
            }
        )
    return rows


def summarize(rows: Sequence[dict]) -> dict:
    counts = {status.value: 0 for status in ShiftStatus}
    for row in rows:
        counts[row["shiftStatus"]] += 1
    return {
        "totalEmployees": len(rows),
        "completed": counts[ShiftStatus.COMPLETED.value],
        "checkedIn": counts[ShiftStatus.CHECKED_IN.value],
        "checkedOut": counts[ShiftStatus.CHECKED_OUT.value],
        "notStarted": counts[ShiftStatus.NOT_STARTED.value],
    }
