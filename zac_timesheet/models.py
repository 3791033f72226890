"""
Data model: credential, work entries and the registration request.

RegistrationRequest.from_dict accepts the same shape the timesheet job queue
sends (camelCase keys) as well as snake_case keys from a YAML request file.
validate_request() is the schema check run before any browser work starts.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class Credential:
    tenant_id: str
    login_id: str
    password: str

    @classmethod
    def from_config(cls, config: dict) -> "Credential":
        return cls(
            tenant_id=config["tenant_id"],
            login_id=config["login_id"],
            password=config["password"],
        )

    def __repr__(self) -> str:
        return f"Credential(tenant_id={self.tenant_id!r}, login_id={self.login_id!r}, password='***')"


@dataclass(frozen=True)
class WorkEntry:
    """One line of a timesheet."""
    code: str
    hour: int
    minute: int
    text: Optional[str] = None


@dataclass(frozen=True)
class RegistrationRequest:
    work_date: date
    start_hour: int
    start_minute: int
    end_hour: int
    end_minute: int
    break_hour: int
    break_minute: int
    entries: tuple = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict) -> "RegistrationRequest":
        """Build a request from a mapping (camelCase or snake_case keys)."""
        def pick(*keys, default=None):
            for key in keys:
                if key in data and data[key] is not None:
                    return data[key]
            return default

        raw_entries = pick("works", "entries", default=[]) or []
        if not isinstance(raw_entries, (list, tuple)):
            raise ValueError(f"Work entries must be a list, got: {raw_entries!r}")
        entries = []
        for i, item in enumerate(raw_entries, start=1):
            if not isinstance(item, dict):
                raise ValueError(f"Work entry {i} must be a mapping, got: {item!r}")
            entries.append(WorkEntry(
                code=str(item.get("code", "")),
                hour=item.get("hour"),
                minute=item.get("minute"),
                text=item.get("text"),
            ))
        return cls(
            work_date=_parse_date(pick("workDate", "work_date")),
            start_hour=pick("workStartHour", "start_hour"),
            start_minute=pick("workStartMinute", "start_minute"),
            end_hour=pick("workEndHour", "end_hour"),
            end_minute=pick("workEndMinute", "end_minute"),
            break_hour=pick("workBreakHour", "break_hour"),
            break_minute=pick("workBreakMinute", "break_minute"),
            entries=tuple(entries),
        )


def _parse_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00")).date()
        except ValueError:
            raise ValueError(f"Invalid work date: {value!r}") from None
    raise ValueError(f"Missing or invalid work date: {value!r}")


def _check_int(name: str, value, low: int, high: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got: {value!r}")
    if not low <= value <= high:
        raise ValueError(f"{name} must be between {low} and {high}, got: {value}")


def validate_request(request: RegistrationRequest) -> RegistrationRequest:
    """Raise ValueError if the request cannot be entered into the report form."""
    if not isinstance(request.work_date, date):
        raise ValueError(f"work_date must be a date, got: {request.work_date!r}")

    _check_int("start_hour", request.start_hour, 0, 23)
    _check_int("start_minute", request.start_minute, 0, 59)
    _check_int("end_hour", request.end_hour, 0, 23)
    _check_int("end_minute", request.end_minute, 0, 59)
    _check_int("break_hour", request.break_hour, 0, 23)
    _check_int("break_minute", request.break_minute, 0, 59)

    for i, entry in enumerate(request.entries, start=1):
        if not entry.code or not str(entry.code).strip():
            raise ValueError(f"Work entry {i}: code is required")
        _check_int(f"Work entry {i} hour", entry.hour, 0, 23)
        _check_int(f"Work entry {i} minute", entry.minute, 0, 59)
        if entry.text is not None and not isinstance(entry.text, str):
            raise ValueError(f"Work entry {i}: text must be a string, got: {entry.text!r}")

    return request


def validate_credential(credential: Credential) -> Credential:
    for name in ("tenant_id", "login_id", "password"):
        value = getattr(credential, name)
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"Credential {name} is required")
    return credential
