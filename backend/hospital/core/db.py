"""
Slow query alerts.

Statements slower than the configured threshold are logged as warnings on
the ``hospital.sql.alerts`` logger with their (masked) parameters and the
route that issued them.
"""

import logging
import time
from typing import Any

from flask import has_request_context, request
from sqlalchemy import event
from sqlalchemy.engine import Engine

from hospital.core.config import (
    get_slow_query_alerts_enabled,
    get_slow_query_threshold_ms,
)

logger = logging.getLogger("hospital.sql.alerts")

# Bound parameters whose names contain one of these are replaced by ***
SENSITIVE_PARAM_MARKERS = ("cpf", "email", "telefone", "endereco", "anamnese")


def mask_params(params: Any) -> Any:
    """Recursively mask sensitive bound parameters and truncate long values."""
    if isinstance(params, dict):
        return {
            key: "***"
            if any(marker in str(key).lower() for marker in SENSITIVE_PARAM_MARKERS)
            else mask_params(value)
            for key, value in params.items()
        }
    if isinstance(params, (list, tuple)):
        return [mask_params(item) for item in params]
    if isinstance(params, bytes):
        return "<binary>"
    text = str(params)
    return text if len(text) <= 200 else text[:200] + "..."


def _start_timer(conn, cursor, statement, parameters, context, executemany):
    context._query_started = time.perf_counter()


def _check_duration(conn, cursor, statement, parameters, context, executemany):
    started = getattr(context, "_query_started", None)
    if started is None or not get_slow_query_alerts_enabled():
        return
    duration_ms = (time.perf_counter() - started) * 1000
    if duration_ms < get_slow_query_threshold_ms():
        return

    # compiled_parameters keeps the column names, which the masking needs
    compiled = getattr(context, "compiled_parameters", None)
    if compiled:
        params = compiled if executemany else compiled[0]
    else:
        params = parameters

    url = conn.engine.url
    alert = {
        "alert_type": "slow_query",
        "duration_ms": round(duration_ms, 2),
        "statement": (statement or "")[:500],
        "params": mask_params(params),
        "db_host": url.host,
        "db_name": url.database,
    }
    if has_request_context() and request.url_rule is not None:
        alert["route"] = request.url_rule.rule
    logger.warning("Slow query detected", extra={"context": alert})


def register_query_timing(engine: Engine) -> None:
    """Attach the slow-query listeners to ``engine`` unless already attached."""
    if event.contains(engine, "after_cursor_execute", _check_duration):
        return
    event.listen(engine, "before_cursor_execute", _start_timer)
    event.listen(engine, "after_cursor_execute", _check_duration)
