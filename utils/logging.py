"""loguru setup: console + optional rotating file, stdlib logging routed in."""

import logging
import sys
import time

from flask import Flask, g, request
from loguru import logger

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)


class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: str = "INFO", log_file: str = None) -> None:
    level = (level or "INFO").upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=_FMT, colorize=True, backtrace=False, diagnose=False)
    if log_file:
        logger.add(
            log_file,
            level=level,
            format=_FMT,
            rotation="10 MB",
            retention=5,
            enqueue=True,
            backtrace=False,
            diagnose=False,
        )
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)


def configure_request_logging(app: Flask) -> None:
    @app.before_request
    def _start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_request(resp):
        started = getattr(g, "request_started", None)
        dt_ms = (time.perf_counter() - started) * 1000 if started else 0.0
        logger.info(
            "http: {} {} -> {} ({:.0f} ms)",
            request.method, request.path, resp.status_code, dt_ms,
        )
        return resp
