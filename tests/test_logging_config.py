import logging

from rich.logging import RichHandler

from prefroom.logging_config import get_logger, setup_logging


def test_get_logger_namespaces_names():
    assert get_logger("prefroom.cli").name == "prefroom.cli"
    assert get_logger("plugin").name == "prefroom.plugin"


def test_setup_logging_installs_rich_handler(tmp_path):
    root = setup_logging("info", tmp_path / "debug.log")

    assert root.name == "prefroom"
    assert root.level == logging.DEBUG
    handler_types = [type(h) for h in root.handlers]
    assert handler_types == [RichHandler, logging.FileHandler]
    assert root.handlers[0].level == logging.INFO

    get_logger("test").debug("detail")
    assert "detail" in (tmp_path / "debug.log").read_text()


def test_unknown_level_falls_back_to_warning():
    root = setup_logging("chatty")
    assert root.level == logging.WARNING
    assert len(root.handlers) == 1
