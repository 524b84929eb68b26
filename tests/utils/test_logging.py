# tests/utils/test_logging.py
import logging

import pytest

from docuvoice.utils.logging import DocuVoiceLogger


class RecordingHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def recording_logger():
    logger = DocuVoiceLogger("test-recording", level="DEBUG")
    handler = RecordingHandler()
    logger.logger.addHandler(handler)
    yield logger, handler
    logger.logger.removeHandler(handler)


def test_reserved_extra_keys_are_renamed(recording_logger):
    logger, handler = recording_logger

    logger.info("Saved document", extra={"module": "documents", "document_id": 7})

    record = handler.records[-1]
    assert record.extra_module == "documents"
    assert record.document_id == 7
    assert record.module == "test_logging"


def test_level_filters_messages():
    logger = DocuVoiceLogger("test-quiet", level="WARNING")
    handler = RecordingHandler()
    logger.logger.addHandler(handler)
    try:
        logger.debug("hidden")
        logger.info("hidden")
        logger.warning("shown")
    finally:
        logger.logger.removeHandler(handler)

    assert [r.getMessage() for r in handler.records] == ["shown"]


def test_sanitize_extra_without_values():
    assert DocuVoiceLogger.sanitize_extra(None) is None
    assert DocuVoiceLogger.sanitize_extra({}) is None
