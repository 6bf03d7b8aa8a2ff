import logging
import logging.handlers
from pathlib import Path


def setup_logging(level: str = "INFO", log_dir: str | None = "logs") -> Path | None:
    """
    Configure root logging: console output plus a rotating application log
    and an error-only log under ``log_dir``. Pass ``log_dir=None`` to log to
    the console only.
    """
    log_format = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(log_format)
    root_logger.addHandler(console_handler)

    if log_dir is None:
        return None

    logs_dir = Path(log_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)

    main_file_handler = logging.handlers.RotatingFileHandler(
        logs_dir / "misthos.log",
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding="utf-8",
    )
    main_file_handler.setFormatter(log_format)
    root_logger.addHandler(main_file_handler)

    error_file_handler = logging.handlers.RotatingFileHandler(
        logs_dir / "errors.log",
        maxBytes=5 * 1024 * 1024,  # 5MB
        backupCount=5,
        encoding="utf-8",
    )
    error_file_handler.setLevel(logging.ERROR)
    error_file_handler.setFormatter(log_format)
    root_logger.addHandler(error_file_handler)

    # Suppress noisy third-party loggers
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logging.getLogger(__name__).info(f"Log files will be saved to: {logs_dir.absolute()}")
    return logs_dir
