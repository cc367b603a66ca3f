import json
import logging
from datetime import datetime, timezone
from typing import Any


def get_logger(name: str, level: int | str = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(level)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


def log_action(
    logger: logging.Logger,
    module: str,
    action: str,
    record_id: str | None,
    page: int | None,
    outcome: str,
    **extra: Any,
) -> None:
    payload = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "level": "INFO",
        "module": module,
        "action": action,
        "record_id": record_id,
        "page": page,
        "outcome": outcome,
    }
    payload.update(extra)
    logger.info(json.dumps(payload, ensure_ascii=False, default=str))
