import logging, sys

from .config import Settings


def setup_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # route encoding diagnostics into the log instead of stderr
    logging.captureWarnings(settings.capture_warnings)
