from pathlib import Path

from loguru import logger

LOG_FILE_PATTERN = "log_{time:YYYY-MM-DD}.log"
LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {thread.name} | {message}"


def setup_logging(root: str, level: str = "INFO", retention_days: int = 14, console: bool = True):
    """Log diario en <logs_root>/log_YYYY-MM-DD.log y, opcional, consola.

    Bajo un servicio sin consola usar console=False.
    """
    logdir = Path(root)
    logdir.mkdir(parents=True, exist_ok=True)
    logger.remove()
    logger.add(
        str(logdir / LOG_FILE_PATTERN),
        format=LOG_FORMAT,
        rotation="00:00",
        retention=f"{retention_days} days",
        level=level,
        encoding="utf-8",
        enqueue=True,
        backtrace=True,
        diagnose=False,
    )
    if console:
        # print resuelve sys.stdout en cada mensaje (sirve con stdout redirigido)
        logger.add(lambda m: print(m, end=""), format=LOG_FORMAT, level=level)
    return logger
