import logging
import logging.handlers
from pathlib import Path

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(log_dir: Path = None, level: str = "INFO") -> logging.Logger:
    """Configura logging para el encoder"""
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG)

    # Evitar handlers duplicados si se llama más de una vez
    for h in list(logger.handlers):
        if getattr(h, "_partsrle", False):
            logger.removeHandler(h)
            h.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    # Handler de consola (stderr, stdout queda libre)
    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
    console_handler.setFormatter(formatter)
    _add(logger, console_handler)

    if log_dir is None:
        return logger

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    # Handler de archivo (rotativo)
    file_handler = logging.handlers.RotatingFileHandler(
        log_dir / "partsrle.log",
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    _add(logger, file_handler)

    # Handler de errores en archivo separado
    error_handler = logging.FileHandler(log_dir / "partsrle_errors.log")
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(formatter)
    _add(logger, error_handler)

    return logger


def _add(logger: logging.Logger, handler: logging.Handler) -> None:
    handler._partsrle = True
    logger.addHandler(handler)
