# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging setup for the fluenthttp CLI and embedding applications."""

import logging
import os

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

# httpx/httpcore emit one INFO line per request; builders already log their own.
TRANSPORT_LOGGERS = ("httpx", "httpcore")


def resolve_level(level: str | None = None) -> int:
    """Map a level name (or ``$FLUENTHTTP_LOG_LEVEL``) to a logging level, WARNING when unknown."""
    name = (level or os.getenv("FLUENTHTTP_LOG_LEVEL") or "WARNING").strip().upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.WARNING


def setup_logging(level: str | None = None) -> int:
    """Configure root logging and keep transport loggers quiet unless debugging."""
    effective = resolve_level(level)
    logging.basicConfig(level=effective, format=LOG_FORMAT)
    transport_level = effective if effective <= logging.DEBUG else max(effective, logging.WARNING)
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)
    return effective


__all__ = ["resolve_level", "setup_logging"]
