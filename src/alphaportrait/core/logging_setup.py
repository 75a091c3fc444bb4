from __future__ import annotations

import logging
import os
from typing import Optional

LOG_LEVEL_VAR = "ALPHAPORTRAIT_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Root logging for the GUI and CLI entry points. Library modules only get loggers."""
    name = (level or os.environ.get(LOG_LEVEL_VAR) or "INFO").upper()
    logging.basicConfig(level=getattr(logging, name, logging.INFO), format=LOG_FORMAT)
    # the SDK's HTTP stack is chatty at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
