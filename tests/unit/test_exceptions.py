"""Unit tests for exception handling system.

Tests both the exception hierarchy and the exception handler utilities,
including negative tests to verify correct exceptions are raised.
"""

import json
import logging

import pytest

from race_analytics.common.exception_handler import (
    format_exception_json,
    get_error_code,
    handle_exception,
    log_exception,
)
from race_analytics.core.domain.exceptions import (
    AnalysisError,
    ConfigurationError,
    DataIngestionError,
    DataValidationError,
    DriverAnalysisError,
    InvalidConfigurationError,
    InvalidSessionError,
    MixedDriverLapsError,
    RaceAnalyticsError,
    SnapshotNotFoundError,
    ValidationError,
)

# Apply @pytest.mark.unit to all tests in this module
pytestmark = pytest.mark.unit


class TestExceptionHierarchy:
    """Tests for the exception class hierarchy."""

    def test_race_analytics_error_is_base(self):
        """RaceAnalyticsError should be the base for all custom exceptions."""
        assert issubclass(ConfigurationError, RaceAnalyticsError)
        assert issubclass(DataIngestionError, RaceAnalyticsError)
        assert issubclass(ValidationError, RaceAnalyticsError)
        assert issubclass(AnalysisError, RaceAnalyticsError)

    def test_data_errors_inherit_from_ingestion(self):
        assert issubclass(SnapshotNotFoundError, DataIngestionError)
        assert issubclass(DataValidationError, DataIngestionError)

    def test_validation_errors(self):
        assert issubclass(InvalidSessionError, ValidationError)
        assert issubclass(MixedDriverLapsError, ValidationError)
        assert issubclass(InvalidConfigurationError, ConfigurationError)
        assert issubclass(DriverAnalysisError, AnalysisError)


class TestExceptionCreation:
    """Tests for creating and using exceptions."""

    def test_basic_exception_creation(self):
        """Basic exception should have message and error code."""
        exc = RaceAnalyticsError("Test error message")
        assert str(exc) == "Test error message"
        assert exc.message == "Test error message"
        assert exc.error_code == "RA_ERR_001"

    def test_exception_with_context_and_cause(self):
        original = FileNotFoundError("laps.json")
        exc = SnapshotNotFoundError("Missing", cause=original, context={"season": 2024})
        assert exc.cause is original
        assert exc.extra_context == {"season": 2024}

    def test_exception_captures_location(self):
        """Exception should capture file, method, and line number."""
        exc = RaceAnalyticsError("Test")
        assert exc.location.file_name is not None
        assert exc.location.method_name is not None
        assert exc.location.line_number > 0

    def test_each_exception_has_unique_error_code(self):
        """Each exception type should have a unique error code."""
        exceptions = [
            RaceAnalyticsError("test"),
            ConfigurationError("test"),
            InvalidConfigurationError("test"),
            DataIngestionError("test"),
            SnapshotNotFoundError("test"),
            DataValidationError("test"),
            ValidationError("test"),
            InvalidSessionError("test"),
            MixedDriverLapsError("test"),
            AnalysisError("test"),
            DriverAnalysisError("test"),
        ]
        codes = {exc.error_code for exc in exceptions}
        assert len(codes) == len(exceptions)


class TestExceptionToDict:
    """Tests for exception JSON serialization."""

    def test_to_dict_basic_structure(self):
        exc = InvalidSessionError("Bad season", context={"season": 1900})
        result = exc.to_dict()

        assert result["error"] == {
            "type": "InvalidSessionError",
            "code": "RA_VAL_002",
            "message": "Bad season",
        }
        assert set(result["location"]) >= {"class", "method", "file", "line"}
        assert result["context"]["season"] == 1900

    def test_to_dict_includes_cause(self):
        exc = DataValidationError("Bad snapshot", cause=ValueError("Expecting value"))
        result = exc.to_dict()

        assert result["cause"] == {"type": "ValueError", "message": "Expecting value"}

    def test_to_dict_excludes_trace_by_default(self):
        exc = DataValidationError("Bad snapshot", cause=ValueError("x"))
        assert "stack_trace" not in exc.to_dict()

    def test_to_dict_is_json_serializable(self):
        exc = MixedDriverLapsError("Mixed", context={"drivers": ["albon", "norris"]})
        assert isinstance(json.dumps(exc.to_dict()), str)


class TestExceptionHandler:
    """Tests for exception handler utilities."""

    def test_format_custom_exception(self):
        result = format_exception_json(SnapshotNotFoundError("Missing", context={"round": 3}))
        assert result["error"]["code"] == "RA_DAT_002"
        assert result["context"]["round"] == 3

    def test_format_standard_exception(self):
        """format_exception_json should handle standard Python exceptions."""
        try:
            raise ValueError("Standard error")
        except ValueError as e:
            result = format_exception_json(e, include_trace=True)

        assert result["error"]["type"] == "ValueError"
        assert result["error"]["code"] == "PYTHON_ERR"
        assert result["error"]["message"] == "Standard error"
        assert result["location"]["method"] == "test_format_standard_exception"
        assert result["stack_trace"]

    def test_format_adds_extra_context(self):
        exc = DriverAnalysisError("Failed", context={"driver": "albon"})
        result = format_exception_json(exc, extra_context={"operation": "pace"})

        assert result["context"] == {"driver": "albon", "operation": "pace"}

    def test_get_error_code(self):
        assert get_error_code(MixedDriverLapsError("test")) == "RA_VAL_003"
        assert get_error_code(DriverAnalysisError("test")) == "RA_ANA_002"
        assert get_error_code(RuntimeError("test")) == "PYTHON_ERR"

    def test_log_exception_writes_json(self, caplog):
        log = logging.getLogger("race_analytics.tests")
        with caplog.at_level(logging.WARNING, logger="race_analytics.tests"):
            log_exception(AnalysisError("Boom"), log=log, level=logging.WARNING)

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert json.loads(record.getMessage())["error"]["code"] == "RA_ANA_001"

    def test_handle_exception_reraises(self):
        with pytest.raises(ValidationError):
            handle_exception(ValidationError("Invalid"), context={"field": "round"})

    def test_handle_exception_returns_safe_dict(self):
        result = handle_exception(ValueError("Oops"), reraise=False)
        assert result["error"]["message"] == "Oops"
        assert "stack_trace" not in result

    def test_handle_exception_logs_at_requested_level(self, caplog):
        log = logging.getLogger("race_analytics.tests")
        with caplog.at_level(logging.WARNING, logger="race_analytics.tests"):
            result = handle_exception(
                DriverAnalysisError("Skipped"), reraise=False, log=log, level=logging.WARNING
            )

        assert caplog.records[-1].levelno == logging.WARNING
        assert result["error"]["code"] == "RA_ANA_002"


class TestExceptionCatchPatterns:
    """Tests for exception catching patterns."""

    def test_catch_by_base_class(self):
        """Should be able to catch all race analytics errors with the base class."""
        for exc in (InvalidSessionError("test"), SnapshotNotFoundError("test")):
            try:
                raise exc
            except RaceAnalyticsError as caught:
                assert caught.error_code.startswith("RA_")
