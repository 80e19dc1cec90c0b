"""Local telemetry events written as JSON lines (opt-out)."""

from __future__ import annotations

import json
import os
import time
from collections import Counter
from importlib import resources
from typing import Any, Iterable, Iterator

import jsonschema

from functionkit.settings import RuntimeSettings

_DISABLE_VALUES = {"0", "false", "no", "off"}

_TELEMETRY_VALIDATOR = None


def telemetry_enabled() -> bool:
    value = os.getenv("FUNCTIONKIT_TELEMETRY", "1").lower()
    return value not in _DISABLE_VALUES


def record_event(settings: RuntimeSettings, event: str, payload: dict[str, Any] | None = None, **extra: Any) -> None:
    record_structured_event(settings, event, payload=payload, **extra)


def record_structured_event(
    settings: RuntimeSettings,
    event: str,
    *,
    payload: dict[str, Any] | None = None,
    level: str = "info",
    status: str | None = None,
    duration_ms: float | None = None,
) -> None:
    """Append one event to ``<log_dir>/telemetry.jsonl``.

    Records are checked against the packaged ``telemetry.schema.json``;
    an invalid record raises ``ValueError`` and nothing is written.
    """

    if not telemetry_enabled():
        return
    record: dict[str, Any] = {
        "ts": time.time(),
        "event": event,
        "payload": payload or {},
        "level": level,
        "version": settings.cli_version,
    }
    if status:
        record["status"] = status
    if duration_ms is not None:
        record["durationMs"] = duration_ms
    try:
        _telemetry_validator().validate(record)
    except jsonschema.ValidationError as exc:
        raise ValueError(f"Invalid telemetry record for '{event}': {exc.message}") from exc
    log_path = settings.telemetry_file
    log_path.parent.mkdir(parents=True, exist_ok=True)
    with log_path.open("a", encoding="utf-8") as fh:
        fh.write(json.dumps(record, ensure_ascii=False) + "\n")


def iter_events(settings: RuntimeSettings) -> Iterator[dict[str, Any]]:
    log_path = settings.telemetry_file
    if not log_path.exists():
        return
    with log_path.open("r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line:
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError:
                continue


def summarize(events: Iterable[dict[str, Any]]) -> dict[str, Any]:
    by_event: Counter[str] = Counter()
    by_status: Counter[str] = Counter()
    for evt in events:
        by_event[evt.get("event", "unknown")] += 1
        by_status[evt.get("status", "unknown")] += 1
    return {"total": sum(by_event.values()), "by_event": dict(by_event), "by_status": dict(by_status)}


def clear(settings: RuntimeSettings) -> None:
    log_path = settings.telemetry_file
    if log_path.exists():
        log_path.unlink()


def _telemetry_validator():  # pragma: no cover - trivial cache
    global _TELEMETRY_VALIDATOR
    if _TELEMETRY_VALIDATOR is None:
        schema_resource = resources.files("functionkit.resources") / "telemetry.schema.json"
        schema = json.loads(schema_resource.read_text(encoding="utf-8"))
        _TELEMETRY_VALIDATOR = jsonschema.Draft202012Validator(schema)
    return _TELEMETRY_VALIDATOR
