import os
import logging


logger = logging.getLogger("shaderdesc")


class ShaderError(Exception):
    """Error raised when a compiled shader cannot be used, e.g. when
    the native compiler rejects the generated source.
    """


def _set_log_level():
    # Set default level
    logger.setLevel(logging.WARN)
    # Set user-specified level
    level = os.getenv("SHADERDESC_LOG_LEVEL", "")
    if level:
        try:
            if level.isnumeric():
                logger.setLevel(int(level))
            else:
                logger.setLevel(level.upper())
        except Exception:
            logger.warning(f"Invalid shaderdesc log level: {level}")


_set_log_level()
