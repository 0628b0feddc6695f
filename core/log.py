import logging
import os
import sys

logger = logging.getLogger("volunteer_hub")

if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    logger.addHandler(handler)

# settings imports this module, so the level is read straight from the env
logger.setLevel(os.environ.get("LOG_LEVEL", "INFO").upper())
logger.propagate = False
