from typing import Any, Dict, List, Optional


class CommandApiError(Exception):
    """Base class for all errors raised by the Command API"""

    pass


class CommandValidationError(CommandApiError):
    """Raised when a create or update payload is malformed or incomplete"""

    def __init__(self, errors: Optional[List[Dict[str, Any]]] = None):
        self.errors = errors or []
        fields = sorted({".".join(str(p) for p in e.get("loc", ())) for e in self.errors})
        super().__init__(
            f"Invalid command payload: {', '.join(fields) if fields else 'no details'}"
        )


class CommandNotFoundError(CommandApiError):
    """Raised when an operation addresses a command id that does not exist"""

    def __init__(self, command_id: int):
        self.command_id = command_id
        super().__init__(f"Command not found: {command_id}")


class InvalidArgumentError(CommandApiError, ValueError):
    """Raised by a repository when called with a missing entity"""

    def __init__(self, argument_name: str):
        self.argument_name = argument_name
        super().__init__(f"Argument '{argument_name}' must not be None")


class PersistenceError(CommandApiError):
    """Raised when the backing store fails while reading or applying changes"""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.original_error = original_error
        super().__init__(message)


class PersistenceFailureError(CommandApiError):
    """Raised when a commit reports that no changes could be applied"""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Failed to save changes for '{operation}'")


class MappingError(CommandApiError):
    """Raised when no mapping rule exists for a source/destination pair"""

    pass
