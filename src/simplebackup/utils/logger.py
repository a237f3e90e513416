# utils/logger.py
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Optional


def setup_logger(
    name: str,
    log_file: Optional[str] = None,
    level: str = "INFO",
    enable_rotation: bool = True,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
    log_dir: Optional[str] = None,
) -> logging.Logger:
    """Setup logger with console output and an optional rotating log file

    Calling it again for the same name updates the level and moves the
    file handler when ``log_dir`` changes; handlers are never duplicated.
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]

    # Console handler for immediate feedback
    if len(logger.handlers) == len(file_handlers):
        stream_handler = logging.StreamHandler(sys.stdout)
        stream_handler.setFormatter(formatter)
        stream_handler.setLevel(logging.INFO)  # Only INFO and above to console
        logger.addHandler(stream_handler)

    if log_file:
        logs_dir = Path(log_dir or os.environ.get("LOG_PATH", "logs"))
        log_path = logs_dir / log_file

        if not any(h.baseFilename == os.path.abspath(log_path) for h in file_handlers):
            try:
                logs_dir.mkdir(parents=True, exist_ok=True)
                if enable_rotation:
                    file_handler = logging.handlers.RotatingFileHandler(
                        log_path,
                        maxBytes=max_bytes,
                        backupCount=backup_count,
                        encoding="utf-8",
                    )
                else:
                    file_handler = logging.FileHandler(log_path, encoding="utf-8")

                file_handler.setFormatter(formatter)
                file_handler.setLevel(logging.DEBUG)  # All levels to file

                for old_handler in file_handlers:
                    logger.removeHandler(old_handler)
                    old_handler.close()
                logger.addHandler(file_handler)

            except (OSError, PermissionError) as e:
                # Fallback: keep the current handlers if file creation fails
                logger.warning(
                    f"Failed to create log file {log_path}: {e}. Keeping existing log output."
                )

    # Prevent propagation to root logger to avoid duplicate messages
    logger.propagate = False

    return logger
