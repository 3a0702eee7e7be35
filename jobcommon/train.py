"""Helpers for training workloads."""

# Permanent failures: general error, shell builtin misuse, cannot execute,
# command not found, invalid exit argument, SIGSEGV.
_PERMANENT_EXIT_CODES = frozenset({1, 2, 126, 127, 128, 139})

# Transient signals (SIGINT, SIGKILL, SIGTERM) and the user-defined
# retryable code of SIGUSR1 (138).
_RETRYABLE_EXIT_CODES = frozenset({130, 137, 143, 138})


def is_retryable_exit_code(exit_code: int) -> bool:
    """Tell whether a container exit code denotes a retryable failure."""
    if exit_code in _PERMANENT_EXIT_CODES:
        return False
    return exit_code in _RETRYABLE_EXIT_CODES