class MedikalakError(Exception):
    """Base class for errors raised by the round core."""


class InvalidQuestion(MedikalakError, ValueError):
    """A question cannot produce a correct answer (no options, bad index)."""


class RoundStateError(MedikalakError, RuntimeError):
    """A session was asked to open or close a round at the wrong time."""
