import asyncio
import logging

from docchat.utils.logging import ROOT_LOGGER, get_logger, setup_logging
from docchat.utils.timing import Timer


def test_setup_logging_changes_level_without_duplicating_handler():
    root = logging.getLogger(ROOT_LOGGER)
    get_logger("docchat.tests")
    handlers = len(root.handlers)

    setup_logging("debug")
    assert root.level == logging.DEBUG
    setup_logging("not-a-level")
    assert root.level == logging.INFO

    assert len(root.handlers) == handlers
    assert root.propagate is False


def test_timer_records_elapsed_time():
    async def stage():
        async with Timer("sleep") as t:
            await asyncio.sleep(0.01)
        return t

    t = asyncio.run(stage())
    assert t.elapsed_s >= 0.01
    assert t.elapsed_ms == t.elapsed_s * 1000
