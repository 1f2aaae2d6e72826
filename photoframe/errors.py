"""Error types shared by the processing and service layers."""


class ProcessingFailure(RuntimeError):
    """Rasterization, buffer extraction or encoding failed.

    Operations are pure functions of their inputs, so a caller may retry by
    invoking the same operation again. No partial output accompanies this error.
    """


class InvalidParameter(ValueError):
    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
