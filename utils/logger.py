import logging
import os


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _has_file_handler(logger, path):

    return any(
        isinstance(handler, logging.FileHandler) and handler.baseFilename == path
        for handler in logger.handlers
    )


def _has_console_handler(logger):

    return any(
        type(handler) is logging.StreamHandler
        for handler in logger.handlers
    )


def setup_logger(name="mutation_plots", log_dir="logs", log_file="pipeline.log", level=logging.INFO, console=True):
    """
    Logger writing to <log_dir>/<log_file> and, optionally, the console.

    Pass name=None to configure the root logger so module loggers share the handlers.
    Handlers already attached for the same log file or the console are not added twice;
    unrelated handlers (e.g. from basicConfig) do not prevent the log file from being attached.
    """

    logger = logging.getLogger(name)
    logger.setLevel(level)

    os.makedirs(log_dir, exist_ok=True)

    log_path = os.path.abspath(os.path.join(log_dir, log_file))

    formatter = logging.Formatter(LOG_FORMAT)

    handlers = []

    if not _has_file_handler(logger, log_path):
        handlers.append(logging.FileHandler(log_path))

    if console and not _has_console_handler(logger):
        handlers.append(logging.StreamHandler())

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
