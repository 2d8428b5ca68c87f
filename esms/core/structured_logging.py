"""Structured logging helpers."""

import logging
from typing import Any

from esms.core.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for the API process and the CLI."""
    logging.basicConfig(level=(level or settings.LOG_LEVEL).upper(), format=LOG_FORMAT)


def build_log_context(
    *,
    request_id: str | None = None,
    route: str | None = None,
    method: str | None = None,
    resource: str | None = None,
    action: str | None = None,
    record_id: str | None = None,
) -> dict[str, Any]:
    """Return a log context dict with only the keys that are set."""
    context: dict[str, Any] = {}
    if request_id:
        context["request_id"] = request_id
    if route:
        context["route"] = route
    if method:
        context["method"] = method
    if resource:
        context["resource"] = resource
    if action:
        context["action"] = action
    if record_id:
        context["record_id"] = record_id
    return context
