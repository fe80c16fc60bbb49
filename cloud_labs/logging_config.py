from __future__ import annotations

import logging

LOG_FORMAT = "%(levelname)s: %(message)s"


def ensure_logging(level: int = logging.INFO) -> None:
    formatter = logging.Formatter(LOG_FORMAT)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    else:
        root.setLevel(level)
        for handler in root.handlers:
            handler.setFormatter(formatter)

    # botocore is chatty at INFO (credential discovery, endpoint resolution).
    logging.getLogger("botocore").setLevel(max(level, logging.WARNING))
