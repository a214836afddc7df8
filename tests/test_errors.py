"""Tests for perch.errors — exception hierarchy."""

from perch.errors import ConfigurationError, NotFound, PerchError


class TestHierarchy:
    def test_configuration_error_is_perch_error(self) -> None:
        assert issubclass(ConfigurationError, PerchError)

    def test_not_found_is_perch_error(self) -> None:
        assert issubclass(NotFound, PerchError)


class TestNotFound:
    def test_default_detail(self) -> None:
        exc = NotFound("/d/1")
        assert exc.path == "/d/1"
        assert str(exc) == "No route matches '/d/1'"

    def test_custom_detail(self) -> None:
        assert str(NotFound("/x", "gone")) == "gone"
