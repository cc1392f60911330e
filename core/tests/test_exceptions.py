"""Tests for the exception hierarchy."""

from event_interception.exceptions import (
    ConfigurationError,
    InterceptionError,
    InvalidEventNameError,
    InvalidHandlerError,
    InvalidSubjectError,
)


class TestExceptionHierarchy:
    def test_hierarchy(self):
        assert issubclass(InvalidSubjectError, InterceptionError)
        assert issubclass(InvalidEventNameError, InterceptionError)
        assert issubclass(InvalidHandlerError, InterceptionError)
        assert issubclass(ConfigurationError, InterceptionError)

    def test_builtin_bases(self):
        assert issubclass(InvalidSubjectError, ValueError)
        assert issubclass(InvalidEventNameError, ValueError)
        assert issubclass(InvalidHandlerError, TypeError)
        assert issubclass(ConfigurationError, ValueError)

    def test_message_and_details(self):
        error = InvalidSubjectError("bad subject", details={"subject_type": "NoneType"})

        assert str(error) == "bad subject"
        assert error.message == "bad subject"
        assert error.details == {"subject_type": "NoneType"}

    def test_details_default(self):
        assert InterceptionError("boom").details == {}
