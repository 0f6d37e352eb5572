"""Tests for octosync.core.errors."""

from octosync.core.errors import ErrorCode


def test_values_are_stable() -> None:
    assert ErrorCode.OK == 0
    assert ErrorCode.USER_ERROR == 1
    assert ErrorCode.ENV_ERROR == 2
    assert ErrorCode.NETWORK_ERROR == 4
    assert ErrorCode.IO_ERROR == 5


def test_can_use_as_exit_code() -> None:
    code: int = ErrorCode.NETWORK_ERROR
    assert int(code) == 4
