"""Exception types raised by the simulation core."""


class FisheryError(Exception):
    """Base class for all pyfishery errors."""


class ConfigurationError(FisheryError, ValueError):
    """Invalid, missing or inconsistent parameters.

    Raised while parameters, state or scenarios are being built, before
    the first simulation step.
    """

    def __init__(self, message: str, problems=None):
        self.problems = list(problems) if problems else []
        if self.problems:
            message = message + ":\n  - " + "\n  - ".join(self.problems)
        super().__init__(message)


class NumericAnomaly(FisheryError, ArithmeticError):
    """A simulation step produced a NaN or infinite state component."""

    def __init__(self, model: str, step: int, component: str, value: float):
        self.model = model
        self.step = step
        self.component = component
        self.value = value
        super().__init__(
            f"{model} model produced non-finite {component}={value!r} at step {step}"
        )
