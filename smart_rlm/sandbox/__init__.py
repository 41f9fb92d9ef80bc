"""
Strategy sandbox module.

- SandboxExecutor / ExecutionResult: run a strategy program behind a failure boundary.
- build_scope / check_program: the allow-listed namespace and static checks.
"""

from smart_rlm.sandbox.toolbox import (
    BLOCKED_ATTRIBUTES,
    SAFE_BUILTINS,
    SandboxSession,
    build_scope,
    check_program,
)
from smart_rlm.sandbox.executor import ExecutionResult, SandboxExecutor

__all__ = [
    "BLOCKED_ATTRIBUTES",
    "SAFE_BUILTINS",
    "SandboxSession",
    "build_scope",
    "check_program",
    "ExecutionResult",
    "SandboxExecutor",
]
