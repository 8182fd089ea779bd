"""Unit tests for the error taxonomy and FailurePolicy."""

import errno

import pytest
from slowrm.core.errors import (
    ConfigurationError,
    FailurePolicy,
    SlowrmError,
    SyscallFailure,
    TraversalPolicyViolation,
)
from slowrm.core.reporter import Reporter


class TestErrors:
    """Tests for the exception classes."""

    def test_hierarchy(self) -> None:
        """All failures share the SlowrmError base."""
        assert issubclass(ConfigurationError, SlowrmError)
        assert issubclass(TraversalPolicyViolation, SlowrmError)
        assert issubclass(SyscallFailure, SlowrmError)

    def test_syscall_failure_uses_strerror(self) -> None:
        """SyscallFailure describes the action and the OS error text."""
        error = OSError(errno.ENOENT, "No such file or directory")
        failure = SyscallFailure("unlink", "/tmp/gone", error)

        assert failure.path == "/tmp/gone"
        assert failure.action == "unlink"
        assert failure.error is error
        assert failure.message == "Could not unlink: No such file or directory"
        assert str(failure) == "Could not unlink: No such file or directory (/tmp/gone)"

    def test_syscall_failure_without_strerror(self) -> None:
        """Errors without strerror fall back to their string form."""
        failure = SyscallFailure("truncate", "/tmp/f", OSError("disk on fire"))
        assert failure.message == "Could not truncate: disk on fire"

    def test_policy_violation_message(self) -> None:
        """TraversalPolicyViolation names the non-recursive mode."""
        violation = TraversalPolicyViolation("/tmp/dir")
        assert violation.path == "/tmp/dir"
        assert "non-recursive mode" in violation.message

    def test_configuration_error_has_no_path(self) -> None:
        """ConfigurationError is not tied to a path."""
        error = ConfigurationError("bad option")
        assert error.path is None
        assert str(error) == "bad option"


class TestFailurePolicy:
    """Tests for FailurePolicy."""

    def test_reports_and_raises_without_force(
        self, reporter: Reporter, reports: list[tuple[str, str]]
    ) -> None:
        """Without force the failure is reported, then raised."""
        policy = FailurePolicy(reporter, force=False)
        violation = TraversalPolicyViolation("/tmp/dir")

        with pytest.raises(TraversalPolicyViolation) as exc_info:
            policy.handle(violation)

        assert exc_info.value is violation
        assert reports == [("/tmp/dir", violation.message)]

    def test_reports_and_continues_with_force(
        self, reporter: Reporter, reports: list[tuple[str, str]]
    ) -> None:
        """With force the failure is only reported."""
        policy = FailurePolicy(reporter, force=True)
        failure = SyscallFailure("unlink", "/tmp/f", OSError(errno.EACCES, "Permission denied"))

        policy.handle(failure)

        assert reports == [("/tmp/f", "Could not unlink: Permission denied")]
