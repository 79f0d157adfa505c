# core/exceptions.py

class StlQuoteError(Exception):
    """Base class for all custom exceptions in this application."""
    kind = "StlQuoteError"

class MalformedInputError(StlQuoteError):
    """Exception raised when an input buffer does not follow its claimed STL layout."""
    kind = "MalformedInput"

class TruncatedInputError(MalformedInputError):
    """Binary STL buffer ends before the declared triangle records do."""
    pass

class InputTooLargeError(MalformedInputError):
    """Upload exceeds the configured size limit. Raised before any decoding starts."""
    pass

class UnsupportedEncodingError(StlQuoteError):
    """Exception raised when a buffer cannot be treated as either STL encoding."""
    kind = "UnsupportedEncoding"

class ValidationError(StlQuoteError):
    """Exception raised for pricing or estimator inputs outside their domain."""
    kind = "ValidationError"

class ConfigurationError(StlQuoteError):
    """Exception raised for errors in configuration loading or validation."""
    kind = "ConfigurationError"
