import logging

from astropulse.shared.logging.logger import HANDLER_NAME, LOG_NAMESPACE, get_logger, setup_logging


def test_loggers_hang_from_project_namespace():
    assert get_logger("time_sync").name == "astropulse.time_sync"
    assert get_logger("astropulse.api.routes").name == "astropulse.api.routes"
    assert get_logger(LOG_NAMESPACE).name == "astropulse"


def test_setup_is_idempotent_and_accepts_level_names():
    root = logging.getLogger()
    previous = root.level
    try:
        project = setup_logging("debug")
        setup_logging("DEBUG")

        assert project.name == LOG_NAMESPACE
        assert sum(h.get_name() == HANDLER_NAME for h in root.handlers) == 1
        assert root.level == logging.DEBUG
        assert logging.getLogger("uvicorn.access").level == logging.WARNING

        setup_logging("verbose")
        assert root.level == logging.INFO
    finally:
        root.setLevel(previous)
