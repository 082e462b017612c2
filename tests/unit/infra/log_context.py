"""Unit tests for per-exchange logging fields."""

from __future__ import annotations

import json
import asyncio
import logging

import pytest

from mcpgate.router import RequestRouter
from tests.helpers.fakes import INIT_MESSAGE, make_table
from mcpgate.logging import request_scope, session_scope, install_log_context

LOGGER_NAME = "mcpgate.tests.context"


@pytest.fixture(autouse=True)
def _stamped_records() -> None:
    install_log_context()


def test_request_scope_stamps_and_restores_fields(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger(LOGGER_NAME)
    with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
        with request_scope("abc") as request_id:
            logger.info("inside")
            with session_scope("def"):
                logger.info("re-tagged")
            logger.info("restored")
        logger.info("outside")

    inside, retagged, restored, outside = caplog.records
    assert (inside.session_id, inside.request_id) == ("abc", request_id)
    assert (retagged.session_id, retagged.request_id) == ("def", request_id)
    assert restored.session_id == "abc"
    assert (outside.session_id, outside.request_id) == ("-", "-")
    assert len(request_id) == 12


def test_request_scope_without_session_uses_placeholder(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger(LOGGER_NAME)
    with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
        with request_scope(None) as first, request_scope(None) as second:
            logger.info("nested")

    (record,) = caplog.records
    assert record.session_id == "-"
    assert record.request_id == second
    assert first != second


def test_initiation_records_carry_the_new_session_id(caplog: pytest.LogCaptureFixture) -> None:
    async def _run() -> str:
        response = await RequestRouter(make_table()).handle("POST", {}, json.dumps(INIT_MESSAGE).encode())
        return response.headers["mcp-session-id"]

    with caplog.at_level(logging.INFO, logger="mcpgate"):
        session_id = asyncio.run(_run())

    created = [record for record in caplog.records if "created" in record.getMessage()]
    assert created
    assert all(record.session_id == session_id for record in created)
