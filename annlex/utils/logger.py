import sys, logging
from loguru import logger

LOG_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"

_console_sink_id = None

def configure_logging(level: str = "INFO") -> None:
    """(Re)install the stderr sink at the given level."""
    global _console_sink_id
    if _console_sink_id is None:
        # Drop loguru's default handler the first time around
        logger.remove()
    else:
        logger.remove(_console_sink_id)
    _console_sink_id = logger.add(sys.stderr, format=LOG_FORMAT, level=level.upper())

# Redirect standard library logging to Loguru
class PropagateHandler(logging.Handler):
    def emit(self, record):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())

def setup_library_interception():
    logging.basicConfig(handlers=[PropagateHandler()], level=0, force=True)
    # The OTLP exporter retries loudly when no collector is listening
    for name in ["urllib3", "opentelemetry"]:
        l = logging.getLogger(name)
        l.handlers = [PropagateHandler()]
        l.propagate = False

configure_logging()
setup_library_interception()
