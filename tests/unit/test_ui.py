"""Tests for logging setup and result tables."""

import json
import logging

from chargefit.core.results.fit_results import FitResult
from chargefit.ui.logging import LOGGER_NAME, close_logging, log, setup_logging
from chargefit.ui.tables import fit_results_table


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_disabled_without_file_or_verbose(self) -> None:
        """No file and no verbose should leave logging unconfigured."""
        assert setup_logging() is None
        log("ignored")

    def test_text_log_file(self, tmp_path) -> None:
        """Should write formatted lines to a .log file."""
        log_file = tmp_path / "logs" / "fit.log"
        logger = setup_logging(log_file)
        log("hello from test", level="warning")
        close_logging()

        assert logger is not None
        assert logger.name == LOGGER_NAME
        content = log_file.read_text()
        assert "hello from test" in content
        assert "WARNING" in content
        assert "session completed" in content

    def test_json_log_file(self, tmp_path) -> None:
        """Should write one JSON object per line to a .json file."""
        log_file = tmp_path / "fit.json"
        setup_logging(log_file)
        logging.getLogger(f"{LOGGER_NAME}.fitting").info("child message")
        close_logging()

        records = [json.loads(line) for line in log_file.read_text().splitlines()]
        messages = [record["message"] for record in records]
        assert "child message" in messages
        assert all({"timestamp", "level", "logger"} <= record.keys() for record in records)

    def test_close_removes_handlers(self, tmp_path) -> None:
        """close_logging should detach every handler."""
        setup_logging(tmp_path / "fit.log")
        close_logging()

        assert logging.getLogger(LOGGER_NAME).handlers == []


class TestFitResultsTable:
    """Tests for fit_results_table."""

    def test_rows(self) -> None:
        """Should add one row per result, failed or not."""
        table = fit_results_table(
            {
                "x": FitResult(amplitude=10.0, gamma=1.0, beta=1.0, success=True, dof=4),
                "y": FitResult.failed(),
            },
            title="Row / Column",
        )

        assert table.row_count == 2
        assert len(table.columns) == 10
