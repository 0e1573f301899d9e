"""
Centralized error handling utilities.

The dialog is driven by hardware events that arrive whether or not the
machine is ready for them, so almost every failure inside the controller is
expected and must not take the installation down. The pattern is:

1. **Raise** a typed exception where the failure is detected
   (`GuardViolation`, `InvalidLedIndexError`, ...)
2. **Convert** it to a log record at the public entry point with
   `handle_errors(re_raise=False)`
3. **Show** configuration and startup errors to the operator through
   `format_error_for_display` in the CLI

## Handling Patterns

| Pattern | Code |
|---------|------|
| Log and continue (controller entry points) | `@handle_errors(operation_name="dispatch", re_raise=False, log_level=logging.WARNING)` |
| Log and re-raise | `@handle_errors(operation_name="connect", re_raise=True)` |
| Critical section with auto-logging | `with ErrorContext("start MIDI"): ...` |
| Pydantic errors from config files | `raise wrap_pydantic_error(e, str(path)) from e` |

## Architecture

```
┌─────────────────────────────────────────┐
│  OPERATOR LAYER (CLI/TUI)               │
│  - Formats error.user_message           │
│  - Shows error.recovery_hint            │
└─────────────────────────────────────────┘
                  ↑ WeatherDialogError
┌─────────────────────────────────────────┐
│  DIALOG LAYER (controller, services)    │
│  - Raises typed, non-fatal errors       │
│  - Logs them at the entry points        │
└─────────────────────────────────────────┘
                  ↑ Exception, OSError, etc.
┌─────────────────────────────────────────┐
│  LOW LEVEL (MIDI, speech process, I/O)  │
└─────────────────────────────────────────┘
```
"""

import logging
from functools import wraps
from typing import Callable, Optional, TypeVar

from .base import WeatherDialogError
from .config import ConfigFileInvalidError, ConfigValidationError

logger = logging.getLogger(__name__)

T = TypeVar('T')


def handle_errors(
    *,
    operation_name: str,
    user_notification: Optional[Callable[[str], None]] = None,
    fallback_value: Optional[T] = None,
    re_raise: bool = True,
    log_level: int = logging.ERROR
) -> Callable:
    """
    Decorator for consistent error handling.

    Our own exceptions are logged with their technical message at
    ``log_level``; anything unexpected is logged with a traceback at ERROR.

    Args:
        operation_name: Name of the operation for logging (e.g., "dispatch")
        user_notification: Optional callback to notify the operator
        fallback_value: Value to return if error occurs and re_raise=False
        re_raise: Whether to re-raise the exception after handling
        log_level: Logging level for WeatherDialogError failures (default: ERROR)

    Example:
        ```python
        @handle_errors(operation_name="dispatch", re_raise=False, log_level=logging.WARNING)
        def dispatch(self, event=None, button_id=None):
            self._check_guards()  # GuardViolation becomes a warning
        ```

    Returns:
        Decorated function
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)

            except WeatherDialogError as e:
                logger.log(log_level, f"Failed to {operation_name}: {e.technical_message}")

                if user_notification:
                    user_notification(e.get_full_message())

                if re_raise:
                    raise
                return fallback_value

            except Exception as e:
                logger.error(f"Unexpected error during {operation_name}: {e}", exc_info=True)

                if user_notification:
                    user_notification(f"Error: {e}")

                if re_raise:
                    raise
                return fallback_value

        return wrapper
    return decorator


class ErrorContext:
    """
    Context manager for error handling with automatic logging.

    Example:
        ```python
        with ErrorContext("start MIDI", re_raise=False) as ctx:
            midi.start()

        if ctx.error:
            print(f"Failed: {ctx.error}")
        ```
    """

    def __init__(
        self,
        operation: str,
        logger_instance: Optional[logging.Logger] = None,
        re_raise: bool = True
    ):
        """
        Initialize error context.

        Args:
            operation: Description of the operation
            logger_instance: Logger to use (defaults to module logger)
            re_raise: Whether to re-raise exceptions
        """
        self.operation = operation
        self.logger = logger_instance or logger
        self.re_raise = re_raise
        self.error: Optional[BaseException] = None

    def __enter__(self) -> "ErrorContext":
        self.logger.debug(f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        """
        Returns:
            True if exception should be suppressed, False otherwise
        """
        if exc_type is None:
            self.logger.debug(f"Completed: {self.operation}")
            return False

        self.error = exc_val

        if isinstance(exc_val, WeatherDialogError):
            self.logger.error(f"Failed to {self.operation}: {exc_val.technical_message}")
        else:
            self.logger.error(f"Failed to {self.operation}: {exc_val}", exc_info=True)

        return not self.re_raise


def wrap_pydantic_error(error: Exception, file_path: str) -> WeatherDialogError:
    """
    Convert Pydantic validation errors to weather dialog exceptions.

    Args:
        error: The Pydantic ValidationError
        file_path: Path to the config file that failed validation

    Returns:
        A ConfigurationError with appropriate type and message
    """
    from pydantic import ValidationError

    error_msg = str(error)

    # Invalid syntax: "Invalid JSON: <actual error> [type=json_invalid, ..."
    if "Invalid JSON" in error_msg or "json_invalid" in error_msg:
        if "Invalid JSON:" in error_msg:
            parse_error = error_msg.split("Invalid JSON:")[1].split("[type=")[0].strip()
        else:
            parse_error = error_msg
        return ConfigFileInvalidError(file_path, parse_error)

    if isinstance(error, ValidationError):
        errors = error.errors()
        if len(errors) == 1:
            first_error = errors[0]
            field = ".".join(str(loc) for loc in first_error.get('loc', ('unknown',)))
            return ConfigValidationError(
                field=field,
                value=first_error.get('input', None),
                error_msg=first_error.get('msg', 'validation failed'),
                file_path=file_path
            )
        if errors:
            error_lines = []
            for err in errors:
                field = ".".join(str(loc) for loc in err.get('loc', ('unknown',)))
                error_lines.append(f"  - {field}: {err.get('msg', 'validation failed')}")

            return ConfigValidationError(
                field="multiple fields",
                value=None,
                error_msg=f"{len(errors)} validation errors:\n" + "\n".join(error_lines),
                file_path=file_path
            )

    return ConfigValidationError(field="unknown", value=None, error_msg=error_msg, file_path=file_path)


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """
    Format an exception for operator display.

    Args:
        error: The exception to format

    Returns:
        Tuple of (user_message, recovery_hint or None)
    """
    if isinstance(error, WeatherDialogError):
        return error.user_message, error.recovery_hint

    error_type = type(error).__name__
    return f"{error_type}: {error}", None
