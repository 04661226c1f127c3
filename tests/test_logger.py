"""
Logger Tests
loguru itself is replaced with a mock; no files are written
"""

from unittest.mock import MagicMock, patch

from src.utils import logger as logger_module
from src.utils.logger import log_audit, setup_logger


class TestSetupLogger:

    def test_sinks_follow_log_file_directory(self, tmp_path, monkeypatch):
        monkeypatch.setattr(logger_module, "_configured", False)
        log_file = tmp_path / "app" / "service.log"

        with patch.object(logger_module, "logger", MagicMock()) as mock_logger:
            setup_logger(str(log_file), "INFO")

        mock_logger.remove.assert_called_once()
        file_sinks = [c.args[0] for c in mock_logger.add.call_args_list[1:]]
        assert file_sinks == [
            str(log_file),
            str(log_file.parent / "error.log"),
            str(log_file.parent / "audit.log"),
        ]
        assert log_file.parent.is_dir()

    def test_configured_only_once(self, tmp_path, monkeypatch):
        monkeypatch.setattr(logger_module, "_configured", False)

        with patch.object(logger_module, "logger", MagicMock()) as mock_logger:
            first = setup_logger(str(tmp_path / "app.log"))
            second = setup_logger(str(tmp_path / "other.log"))

        assert first is second
        mock_logger.remove.assert_called_once()
        assert mock_logger.add.call_count == 4

    def test_audit_sink_only_accepts_audit_records(self, tmp_path, monkeypatch):
        monkeypatch.setattr(logger_module, "_configured", False)

        with patch.object(logger_module, "logger", MagicMock()) as mock_logger:
            setup_logger(str(tmp_path / "app.log"))

        audit_filter = mock_logger.add.call_args_list[-1].kwargs["filter"]
        assert audit_filter({"extra": {"AUDIT": True}})
        assert not audit_filter({"extra": {}})


class TestLogAudit:

    def test_audit_line_format(self):
        with patch.object(logger_module, "logger", MagicMock()) as mock_logger:
            log_audit(2, "EXPENSE_APPROVED", "expense_id=1")

        mock_logger.bind.assert_called_once_with(AUDIT=True)
        mock_logger.bind.return_value.info.assert_called_once_with(
            "USER_ID=2 | ACTION=EXPENSE_APPROVED | DETAILS=expense_id=1"
        )
