class HashRngError(Exception):
    """Base class for hashrng-specific errors."""


class PeriodExhaustedError(HashRngError):
    """Every block of the counter period has already been generated."""

    def __init__(self, requested: int, remaining: int):
        super().__init__(f"stream exhausted: requested {requested} bytes, {remaining} left in period")
        self.requested = requested
        self.remaining = remaining


# Seed / digest selection
class SeedEncodingError(HashRngError, TypeError):
    pass


class DigestError(HashRngError, ValueError):
    pass
