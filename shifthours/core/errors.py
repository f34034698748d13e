# shifthours/core/errors.py
"""
Validation failures raised on the assignment write path.

Each failure carries a ``kind`` (the taxonomy name callers switch on) and a
human readable message. The aggregation path never raises these; it logs and
skips malformed data instead.
"""


class AssignmentValidationError(Exception):
    """Base type for every rejection of a proposed assignment."""

    kind = "AssignmentValidationError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind, "message": self.message}


class InvalidTimeFormat(AssignmentValidationError, ValueError):
    kind = "InvalidTimeFormat"


class UnknownTaskType(AssignmentValidationError):
    kind = "UnknownTaskType"


class NoActivityDefined(AssignmentValidationError):
    kind = "NoActivityDefined"


class ZeroLengthShift(AssignmentValidationError):
    kind = "ZeroLengthShift"


class StartOutOfRange(AssignmentValidationError):
    kind = "StartOutOfRange"


class EndOutOfRange(AssignmentValidationError):
    kind = "EndOutOfRange"


class CompletelyOutOfRange(AssignmentValidationError):
    kind = "CompletelyOutOfRange"


class BreakTimesMissing(AssignmentValidationError):
    kind = "BreakTimesMissing"


class BreakOutsideShiftRange(AssignmentValidationError):
    kind = "BreakOutsideShiftRange"


class BreakEndNotAfterStart(AssignmentValidationError):
    kind = "BreakEndNotAfterStart"
