class JettError(Exception):
    """Base exception for all Jett errors."""
    pass

class RecoverableError(JettError):
    """An error the session can continue after."""
    pass

class ValidationError(RecoverableError):
    """Malformed or out-of-range user input; the message is shown to the user."""
    pass

class InvalidDate(ValidationError):
    """Date text matched none of the supported formats."""
    pass

class InvalidRange(ValidationError):
    """An event ends before it starts."""
    pass

class FileOperationError(RecoverableError):
    """File operation failed but can be retried."""
    pass
