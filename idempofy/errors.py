"""Error taxonomy for fingerprinting and hashing failures."""

__all__ = [
    "IdempofyError",
    "InvalidConfigurationError",
    "UnknownStrategyError",
    "MissingFieldListError",
    "HashingError",
    "MissingSecretKeyError",
    "UnsupportedAlgorithmError",
]


class IdempofyError(Exception):
    """Base class for all idempofy errors."""

    code = "IDEMPOFY_E000"

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"[{self.code}] {message}")


# Configuration errors (E1xx)
class InvalidConfigurationError(IdempofyError):
    code = "IDEMPOFY_E100"


class UnknownStrategyError(InvalidConfigurationError):
    code = "IDEMPOFY_E101"

    def __init__(self, strategy: str):
        self.strategy = strategy
        super().__init__(f"Unknown strategy: {strategy}")


class MissingFieldListError(InvalidConfigurationError):
    code = "IDEMPOFY_E102"

    def __init__(self, strategy: str):
        self.strategy = strategy
        super().__init__(
            f"{strategy.capitalize()} strategy requires fields to be specified"
        )


# Hashing errors (E2xx)
class HashingError(IdempofyError):
    code = "IDEMPOFY_E200"


class MissingSecretKeyError(HashingError):
    code = "IDEMPOFY_E201"

    def __init__(self, algorithm: str):
        self.algorithm = algorithm
        super().__init__(f"Secret key is required for {algorithm.upper()}")


class UnsupportedAlgorithmError(HashingError):
    code = "IDEMPOFY_E202"

    def __init__(self, algorithm: str | None):
        self.algorithm = algorithm
        super().__init__(f"Unsupported hashing algorithm: {algorithm}")
