# planforge/errors.py
"""
Error taxonomy for the planning pipeline.

Remote-reasoning failures share one base class so dual-mode components can
decide between re-raising and falling back with a single except clause.
Local heuristics never raise on well-formed input.
"""


class PlannerError(Exception):
    """Base class for all planforge errors."""


class RemoteReasoningError(PlannerError):
    """The remote reasoning service failed (network, auth, rate limit, timeout)."""


class MalformedResponseError(RemoteReasoningError):
    """Remote output could not be coerced into JSON by any extraction strategy."""


class MissingFieldError(MalformedResponseError):
    """Remote JSON parsed but lacks a required top-level key."""

    def __init__(self, field: str, context: str = "response"):
        self.field = field
        super().__init__(f"Missing required field '{field}' in {context}")


class PipelineAbortedError(PlannerError):
    """A fatal stage failure stopped the pipeline."""

    def __init__(self, stage: str, cause: str):
        self.stage = stage
        self.cause = cause
        super().__init__(f"Pipeline aborted at stage '{stage}': {cause}")
