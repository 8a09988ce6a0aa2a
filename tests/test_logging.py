"""
Structured operation logging.
"""

import logging
import uuid

import pytest

from simsearch.vector.index import VectorStore
from simsearch.vector.similarity import SimilarityEngine
from util.logging import StructuredLogger, logger, resolve_log_level


class TestStructuredLogger:
    """Message format of the structured logger."""

    def test_log_operation_format(self, caplog):
        with caplog.at_level(logging.INFO, logger="simsearch"):
            logger.log_operation("collection.add", "success", {"collection": "docs"})

        assert "Operation: collection.add, Status: success" in caplog.text
        assert "'collection': 'docs'" in caplog.text

    def test_vector_operation_logs_id_not_values(self, caplog):
        doc_id = uuid.uuid4()
        with caplog.at_level(logging.DEBUG, logger="simsearch"):
            logger.log_vector_operation("add", doc_id, {"dimension": 3})

        assert "vector.add" in caplog.text
        assert str(doc_id) in caplog.text
        assert "'dimension': 3" in caplog.text

    def test_search_log(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="simsearch"):
            logger.log_search("docs", dimension=3, top_k=5, returned=2, duration_ms=0.12345)

        record = caplog.records[-1]
        assert record.levelno == logging.DEBUG
        assert "'returned': 2" in record.getMessage()
        assert "'duration_ms': 0.123" in record.getMessage()

    def test_handler_installed_once(self):
        StructuredLogger("simsearch")
        StructuredLogger("simsearch")
        assert len(logging.getLogger("simsearch").handlers) == 1

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        custom = StructuredLogger("simsearch.test_level")
        assert custom.logger.level == logging.WARNING

    def test_level_from_dotenv_file(self, tmp_path, monkeypatch):
        """LOG_LEVEL set only in a .env file is honoured."""
        # setenv first so the value loaded from the file is removed afterwards
        monkeypatch.setenv("LOG_LEVEL", "INFO")
        monkeypatch.delenv("LOG_LEVEL")
        env_file = tmp_path / ".env"
        env_file.write_text("LOG_LEVEL=ERROR\n")

        assert resolve_log_level(str(env_file)) == logging.ERROR

    def test_environment_wins_over_dotenv_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        env_file = tmp_path / ".env"
        env_file.write_text("LOG_LEVEL=ERROR\n")

        assert resolve_log_level(str(env_file)) == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        assert resolve_log_level() == logging.INFO


class TestStoreLogging:
    """Per-operation store logging is gated on DEBUG."""

    def test_store_operations_logged_in_debug_mode(self, caplog, monkeypatch):
        monkeypatch.setenv("DEBUG", "true")
        store = VectorStore(name="docs", engine=SimilarityEngine(parallel=False))
        doc_id = uuid.uuid4()

        with caplog.at_level(logging.DEBUG, logger="simsearch"):
            store.add_or_update(doc_id, [1.0, 2.0])
            store.add_or_update(doc_id, [1.0, 3.0])
            store.search([1.0, 1.0], 1)
            store.remove(doc_id)

        assert "vector.add" in caplog.text
        assert "vector.update" in caplog.text
        assert "Operation: search" in caplog.text
        assert "vector.remove" in caplog.text

    def test_store_operations_silent_by_default(self, caplog, monkeypatch):
        monkeypatch.setenv("DEBUG", "false")
        store = VectorStore(name="docs", engine=SimilarityEngine(parallel=False))

        with caplog.at_level(logging.DEBUG, logger="simsearch"):
            store.add_or_update(uuid.uuid4(), [1.0, 2.0])
            store.search([1.0, 1.0, 1.0], 1)

        assert caplog.text == ""


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
