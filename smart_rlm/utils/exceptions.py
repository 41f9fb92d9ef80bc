"""
Custom exception classes for the smart RLM engine.

One base class for the application and one subclass per layer, so callers
can catch everything with RLMError or a single layer precisely.
"""


class RLMError(Exception):
    """
    Base exception class for all application-specific errors.
    """
    pass


class ConfigurationError(RLMError):
    """
    Raised when there's a configuration error.

    This exception is raised when:
    - Required environment variables are missing
    - Configuration values are invalid
    """
    pass


class DocumentLoadingError(RLMError):
    """
    Raised when the source document cannot be read.

    This exception is raised by DocumentLoader when:
    - The file does not exist
    - The PDF is corrupted or text extraction fails
    - The text file cannot be decoded
    """
    pass


class ChunkingError(RLMError):
    """
    Raised when chunking parameters are invalid.

    A window step of zero or less would never advance, so the chunker
    refuses such parameters instead of looping.
    """
    pass


class AgentError(RLMError):
    """
    Raised when there's an error in agent processing.

    This exception is raised by agents when:
    - The model client is missing
    - The model service call fails
    """
    pass


class PlanningError(AgentError):
    """
    Raised when the root agent cannot produce a strategy program.

    Fatal for the run: the engine moves to FAILED and re-raises.
    """
    pass


class SandboxError(RLMError):
    """
    Raised inside the sandbox boundary when a strategy program fails.

    Never escapes SandboxExecutor.execute(); it is recorded as a diagnostic.
    """
    pass


class SandboxViolationError(SandboxError):
    """
    Raised when a strategy program uses a construct outside the allow-list
    (import statements, dunder attribute access).
    """
    pass


class EvaluationError(RLMError):
    """
    Raised when there's an error during evaluation.

    This exception is raised when:
    - An evaluation case cannot be run
    - The report cannot be written
    """
    pass
