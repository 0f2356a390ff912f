"""
Logging setup for scripts and the dashboard.

Library modules only ever call logging.getLogger(__name__); handlers are
installed here, on request, never at import time.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from .config import LOG_LEVEL_ENV

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# marks the handler we installed so repeated calls don't stack handlers
_HANDLER_NAME = "money_model_stdout"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    level_name = (level or os.environ.get(LOG_LEVEL_ENV, "INFO")).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    root.setLevel(log_level)

    if not any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    return root
