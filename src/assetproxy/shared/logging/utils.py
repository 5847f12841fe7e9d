__all__ = [
    "replace_uvicorn_loggers",
]


def replace_uvicorn_loggers(suppress_startup_logs: bool = False) -> None:
    """
    Route uvicorn, starlette and fastapi loggers through our stream handler.

    Should be called before uvicorn starts processing requests.

    Args:
        suppress_startup_logs: Raise the uvicorn.error logger to WARNING so
            its startup banner lines are not printed.
    """
    import logging

    from .factory import get_logger

    for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access", "starlette", "fastapi"):
        logger = get_logger(logger_name, use_stream=True)
        if suppress_startup_logs and logger_name == "uvicorn.error":
            logger.setLevel(logging.WARNING)
