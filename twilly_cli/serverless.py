"""
twilly_cli.serverless
──────────────────────
Serverless menu: browse services and their environments, delete either,
and read environment logs on screen or into a JSON file.
"""
from __future__ import annotations

import json
import sys
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum
from pathlib import Path

from twilly import Client, TwilioError
from twilly.resources.serverless.environments import Environment, ServerlessEnvironment
from twilly.resources.serverless.logs import Level, ServerlessLog
from twilly.resources.serverless.services import Service, ServerlessService
from twilly.runtime.serialize import to_dict
from twilly_cli import display, prompts
from twilly_cli.errors import or_exit, report
from twilly_cli.menus import browse, manage

# Twilio keeps Serverless logs for 30 days
LOG_RETENTION_DAYS = 30


class LogAction(str, Enum):
    GET_LOG = "Get Log"
    LIST_LOGS = "List Logs"

    def __str__(self) -> str:
        return self.value


class TimeRange(str, Enum):
    LAST_30_MINUTES = "Last 30 minutes"
    LAST_HOUR = "Last hour"
    LAST_6_HOURS = "Last 6 hours"
    TODAY = "Today"
    CUSTOM = "Custom"

    def __str__(self) -> str:
        return self.value


class Output(str, Enum):
    WRITE_TO_FILE = "Write to file"
    VIEW = "View"

    def __str__(self) -> str:
        return self.value


_RELATIVE = {
    TimeRange.LAST_30_MINUTES: timedelta(minutes=30),
    TimeRange.LAST_HOUR: timedelta(hours=1),
    TimeRange.LAST_6_HOURS: timedelta(hours=6),
}

_function_sid = prompts.sid_validator("ZH", "Function")
_log_sid = prompts.sid_validator("NO", "Log")


def _service_label(service: ServerlessService) -> str:
    return f"({service.sid}) {service.friendly_name}"


def _environment_label(environment: ServerlessEnvironment) -> str:
    return f"({environment.sid}) {environment.unique_name} - {environment.domain_name}"


def _log_label(log: ServerlessLog) -> str:
    return f"({log.sid}) {log.date_created} - {log.message}"


def time_range_bounds(
    choice: TimeRange, now: datetime
) -> tuple[datetime, datetime] | None:
    """
    Start and end of a preset range ending at *now* (UTC).

    Returns None for CUSTOM, whose dates come from the user.
    """
    if choice in _RELATIVE:
        return now - _RELATIVE[choice], now
    if choice is TimeRange.TODAY:
        return datetime.combine(now.date(), time.min, tzinfo=timezone.utc), now
    return None


def custom_bounds(start: date, end: date, now: datetime) -> tuple[datetime, datetime]:
    """Whole days from *start* through *end*; an *end* of today stops at *now*."""
    start_at = datetime.combine(start, time.min, tzinfo=timezone.utc)
    if end == now.date():
        return start_at, now
    return start_at, datetime.combine(end, time(23, 59, 59), tzinfo=timezone.utc)


def write_logs(logs: list[ServerlessLog], path: Path) -> bool:
    try:
        path.write_text(json.dumps([to_dict(log) for log in logs], indent=2))
    except OSError as exc:
        print(f"Unable to create log file. Action aborted: {exc}", file=sys.stderr)
        return False
    print("Log file created")
    return True


# ── Services ──────────────────────────────────────────────────────────────────

async def choose_serverless_action(twilio: Client) -> None:
    print("Fetching Serverless Services...")
    services = await or_exit(twilio.serverless().services().list())
    display.found(len(services), "Serverless Services")
    await browse(
        "Choose a Serverless Service:",
        services,
        _service_label,
        lambda service: _manage_service(twilio.serverless().service(service.sid), service),
    )


async def _manage_service(resource: Service, service: ServerlessService) -> bool:
    async def environments() -> None:
        await _environments(resource)

    return await manage(
        "Serverless Service",
        service,
        delete=resource.delete,
        children={"Environments": environments},
    )


# ── Environments ──────────────────────────────────────────────────────────────

async def _environments(service: Service) -> None:
    print("Fetching Serverless Environments...")
    environments = await or_exit(service.environments().list())
    display.found(len(environments), "Serverless Environments")
    await browse(
        "Choose a Serverless Environment:",
        environments,
        _environment_label,
        lambda environment: _manage_environment(service, environment),
    )


async def _manage_environment(service: Service, environment: ServerlessEnvironment) -> bool:
    resource = service.environment(environment.sid)

    async def logs() -> None:
        await _logs(resource)

    return await manage(
        "Serverless Environment",
        environment,
        delete=resource.delete,
        children={"Logs": logs},
    )


# ── Logs ──────────────────────────────────────────────────────────────────────

async def _logs(environment: Environment) -> None:
    while True:
        action = prompts.pick("Select an action:", list(LogAction))
        if action is None:
            return
        if action is LogAction.GET_LOG:
            await _get_log(environment)
        elif action is LogAction.LIST_LOGS:
            await _list_logs(environment)


async def _get_log(environment: Environment) -> None:
    sid = prompts.ask("Please provide a Log SID:", placeholder="NO...", validators=[_log_sid])
    if sid is None:
        return
    try:
        log = await environment.log(sid).get()
    except TwilioError as exc:
        report(exc, f"A Log with SID '{sid}' was not found.")
        return
    display.details(log)


def _ask_time_range() -> tuple[datetime | None, datetime | None] | None:
    """Chosen bounds, (None, None) for Twilio's default of the last day, or None on cancel."""
    filter_range = prompts.confirm(
        "Would you like to filter by time range? (default is the last 24 hours)"
    )
    if filter_range is None:
        return None
    if not filter_range:
        return None, None

    choice = prompts.select("Choose a time range:", list(TimeRange))
    if choice is None:
        return None
    now = datetime.now(timezone.utc)
    bounds = time_range_bounds(choice, now)
    if bounds is not None:
        return bounds

    today = now.date()
    start = prompts.ask_date(
        "Choose a start date:",
        minimum=today - timedelta(days=LOG_RETENTION_DAYS),
        maximum=today,
    )
    if start is None:
        return None
    end = prompts.ask_date("Choose an end date:", minimum=start, maximum=today)
    if end is None:
        return None
    return custom_bounds(start, end, now)


async def _list_logs(environment: Environment) -> None:
    time_range = _ask_time_range()
    if time_range is None:
        return
    start_date, end_date = time_range

    function_sid = None
    filter_function = prompts.confirm("Would you like to filter by a specific function?")
    if filter_function is None:
        return
    if filter_function:
        function_sid = prompts.ask(
            "Please provide a function SID:", placeholder="ZH...", validators=[_function_sid]
        )
        if function_sid is None:
            return

    levels = prompts.multi_select(
        "Select the log levels you would like to view (empty for all):", list(Level)
    )
    if levels is None:
        return
    levels = levels or list(Level)

    print("Fetching logs...")
    logs = await or_exit(
        environment.logs().list(
            function_sid=function_sid, start_date=start_date, end_date=end_date
        )
    )
    print("Filtering...")
    logs = [log for log in logs if log.level in levels]
    display.found(len(logs), "logs")
    if not logs:
        return

    output = prompts.pick("Select an output:", list(Output))
    if output is Output.WRITE_TO_FILE:
        write_logs(logs, Path(f"{environment.sid}.json"))
    elif output is Output.VIEW:
        logs.sort(key=lambda log: log.date_created, reverse=True)
        await browse(
            "Choose a Serverless Log:",
            logs,
            _log_label,
            lambda log: manage("Serverless Log", log),
        )


__all__ = [
    "LogAction",
    "TimeRange",
    "time_range_bounds",
    "custom_bounds",
    "write_logs",
    "choose_serverless_action",
]
