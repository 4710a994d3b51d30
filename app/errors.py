class SalesAnalysisError(ValueError):
    """Base class for structural problems with an analysis request."""


class InvalidInputError(SalesAnalysisError):
    """Sales data is missing, or one of its collections is missing or empty."""


class InvalidOptionsError(SalesAnalysisError):
    """Options are missing or are not an options object."""


class MissingStrategyError(SalesAnalysisError):
    """The revenue or bonus strategy was not supplied."""
