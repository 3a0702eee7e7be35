import pytest

from jobcommon.train import is_retryable_exit_code


@pytest.mark.parametrize(
    "exit_code, expected",
    [(1, False), (2, False), (3, False), (130, True), (138, True)],
)
def test_is_retryable_exit_code(exit_code, expected):
    assert is_retryable_exit_code(exit_code) is expected


@pytest.mark.parametrize("exit_code", [126, 127, 128, 139, 0])
def test_permanent_and_unknown_codes(exit_code):
    assert is_retryable_exit_code(exit_code) is False


@pytest.mark.parametrize("exit_code", [137, 143])
def test_signal_codes_are_retryable(exit_code):
    assert is_retryable_exit_code(exit_code) is True