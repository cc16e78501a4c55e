from __future__ import annotations

import logging
from typing import Any, Dict

# Attributes every LogRecord already carries (taskName included on 3.12+);
# passing any of them through `extra` makes logging raise KeyError.
RESERVED_LOG_KEYS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime"}


def _clean_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {
        k: v for k, v in fields.items() if k not in RESERVED_LOG_KEYS and v is not None
    }


def log_event(
    event: str,
    logger: logging.Logger | None = None,
    *,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """
    Emit one structured event; the message is the event name and the
    fields ride along as record attributes for LogfmtFormatter.
    Reserved LogRecord attributes and None values are dropped.
    """
    log = logger or logging.getLogger("harbor_mcp.observability")
    log.log(level, event, extra=_clean_fields(fields))


__all__ = ["log_event", "RESERVED_LOG_KEYS"]
