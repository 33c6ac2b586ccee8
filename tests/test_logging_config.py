import logging

import pytest

from sentirax.utils.logging_config import (
    DEFAULT_LOG_LEVELS,
    LoggerCategory,
    LoggingManager,
    category_for,
)


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_overrides_apply_only_to_known_categories(tmp_path):
    manager = LoggingManager(tmp_path, {"api": "debug", "nope": "DEBUG", "server": "LOUD"})
    levels = manager.get_all_levels()

    assert levels[LoggerCategory.API] == logging.DEBUG
    assert levels[LoggerCategory.SERVER] == DEFAULT_LOG_LEVELS[LoggerCategory.SERVER]
    assert "nope" not in levels


def test_setup_writes_log_file_and_sets_module_levels(tmp_path, restore_root_logging):
    manager = LoggingManager(tmp_path / "logs", {"ui": "ERROR"})
    manager.setup_logging()

    assert logging.getLogger("sentirax.ui.views.home_view").getEffectiveLevel() == logging.ERROR
    assert logging.getLogger("sentirax.ui.preview.media_widgets").getEffectiveLevel() == logging.INFO
    assert logging.getLogger("urllib3").level == logging.WARNING

    logging.getLogger("sentirax.core.flows").info("hello from the test")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert "hello from the test" in manager.log_file.read_text(encoding="utf-8")


def test_set_category_level(tmp_path):
    manager = LoggingManager(tmp_path)
    manager.set_category_level(LoggerCategory.PREVIEW, logging.DEBUG)

    assert manager.get_category_level(LoggerCategory.PREVIEW) == logging.DEBUG
    assert logging.getLogger("sentirax.ui.preview.preview_overlay").getEffectiveLevel() == logging.DEBUG


@pytest.mark.parametrize(
    "name, category",
    [
        ("sentirax.core.flows", LoggerCategory.CORE),
        ("sentirax.core.api.downloader", LoggerCategory.API),
        ("sentirax.core.preview", LoggerCategory.PREVIEW),
        ("sentirax.ui.views.results_view", LoggerCategory.UI),
        ("sentirax.ui.preview.preview_overlay", LoggerCategory.PREVIEW),
        ("sentirax.corex", None),
        ("urllib3", None),
    ],
)
def test_category_for_uses_longest_prefix(name, category):
    assert category_for(name) == category
