"""
Logging configuration utility for the AnimeWatch CLI and services.
"""
import logging
import sys
import os
import threading


def log_thread_exception(args: threading.ExceptHookArgs) -> None:
    """Log exceptions that escape a background thread instead of printing them to stderr."""
    if issubclass(args.exc_type, SystemExit):
        return
    thread_name = args.thread.name if args.thread is not None else "unknown"
    logging.getLogger("animewatch.threads").error(
        f"Unhandled exception in thread {thread_name}: {args.exc_value}",
        exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
    )


def setup_logging(verbosity: int = 0, logfile: str = None) -> None:
    """
    Configure logging level and optional file output.

    Args:
        verbosity (int): Verbosity level (0=off, 1=info, 2=debug).
        logfile (str, optional): Path to log file. If None, logs only to console.

    Returns:
        None
    """
    if verbosity == 0:
        level = logging.CRITICAL + 1  # disables all log output to terminal
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(threadName)s - %(module)s::%(funcName)s - %(message)s')

    logger = logging.getLogger()
    logger.setLevel(level if verbosity > 0 or not logfile else logging.INFO)
    logger.handlers.clear()

    # Console handler
    if verbosity > 0:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(level)
        logger.addHandler(console_handler)

    # Optional file handler, INFO at least so background watcher errors are kept
    if logfile:
        file_handler = logging.FileHandler(logfile, encoding='utf-8')
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level if verbosity > 0 else logging.INFO)
        logger.addHandler(file_handler)

    # Requests/urllib3 connection chatter is only useful at -vvv
    logging.getLogger("urllib3").setLevel(logging.DEBUG if verbosity > 2 else logging.WARNING)

    # The feed watcher runs in a daemon thread; its crashes go to the same handlers
    threading.excepthook = log_thread_exception

    logger.info(f"Command line: {' '.join(sys.argv)}")
    logger.info(f"Current working directory: {os.getcwd()}")
