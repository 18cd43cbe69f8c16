from enum import IntEnum
from typing import Optional


class SplitError(IntEnum):
    """Exit codes of a split run. Zero means success."""
    Ok = 0
    Unk = -1
    InvalidArgs = 1
    ConfNotFound = 2
    InvalidConf = 3
    SplitMaskMissing = 4
    InputError = 5
    ConfDocMissingInput = 6
    ConfDocInputNotFound = 7
    ConfDocInvalidInvRange = 8
    ConfDocInvalidDepthRange = 9


class SplitException(Exception):
    """Aborts the run with a single error code."""

    def __init__(self, error: SplitError, message: Optional[str] = None):
        self.error = error
        super().__init__(message or error.name)
