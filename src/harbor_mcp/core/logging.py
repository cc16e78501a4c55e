import logging
import sys
from typing import Any

LOG_EXTRA_FIELDS = (
    "session_id",
    "tool",
    "method",
    "path",
    "status",
    "duration_ms",
    "error_type",
)


class LogfmtFormatter(logging.Formatter):
    """Small logfmt-style formatter that tolerates missing extras."""

    def format(self, record: logging.LogRecord) -> str:
        kv: list[str] = [
            f"level={record.levelname.lower()}",
            f"logger={record.name}",
        ]

        msg = record.getMessage()
        if msg:
            kv.append(f"event={self._fmt_val(msg)}")

        for key in LOG_EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is None:
                continue
            kv.append(f"{key}={self._fmt_val(val)}")

        if record.exc_info and record.exc_info[0] is not None:
            kv.append(f"exc_type={record.exc_info[0].__name__}")
            line = " ".join(kv)
            # Tracebacks only reach stderr at debug level
            if logging.getLogger().isEnabledFor(logging.DEBUG):
                line += "\n" + self.formatException(record.exc_info)
            return line

        return " ".join(kv)

    @staticmethod
    def _fmt_val(val: Any) -> str:
        if isinstance(val, (int, float, bool)):
            return str(val)
        s = str(val)
        if " " in s or "=" in s or '"' in s:
            s = '"' + s.replace('"', '\\"') + '"'
        return s


def setup_logging(debug: bool = False) -> None:
    """
    Initialize root logging on stderr with logfmt output.
    stdout is reserved for the stdio transport's protocol frames.
    """
    root = logging.getLogger()
    # Avoid duplicate handlers if called twice
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(LogfmtFormatter())
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.INFO)

    # httpx logs every request at INFO; keep that behind the debug flag
    logging.getLogger("httpx").setLevel(logging.DEBUG if debug else logging.WARNING)


__all__ = ["setup_logging", "LogfmtFormatter", "LOG_EXTRA_FIELDS"]
