"""
Exception hierarchy for the weather dialog.

## Exception Hierarchy

```
WeatherDialogError (base)
├── ConfigurationError
│   ├── ConfigFileInvalidError
│   └── ConfigValidationError
├── DialogError
│   ├── GuardViolation
│   ├── UnknownStateError
│   ├── InvalidLedIndexError
│   └── InvalidButtonError
└── SpeechEngineError
```

Every exception carries:

- `user_message`: Human-friendly message for display to the operator
- `technical_message`: Detailed message for logging
- `recoverable`: Whether the error can be recovered from
- `recovery_hint`: Optional suggestion for how to fix the issue

### Example: Rejected input

```python
from weatherdialog.exceptions import GuardViolation

raise GuardViolation(GuardViolation.SPEAKING)

# Logged as: "Failed to dispatch: Guard violation: speaking, please wait ..."
```

Dialog errors are never fatal; see `weatherdialog.exceptions.handlers` for the
decorator that turns them into log records at the controller entry points.
"""

from .base import WeatherDialogError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .dialog import (
    DialogError,
    GuardViolation,
    InvalidButtonError,
    InvalidLedIndexError,
    UnknownStateError,
)
from .handlers import (
    ErrorContext,
    format_error_for_display,
    handle_errors,
    wrap_pydantic_error,
)
from .speech import SpeechEngineError

__all__ = [
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    "DialogError",
    "ErrorContext",
    "GuardViolation",
    "InvalidButtonError",
    "InvalidLedIndexError",
    "SpeechEngineError",
    "UnknownStateError",
    "WeatherDialogError",
    "format_error_for_display",
    "handle_errors",
    "wrap_pydantic_error",
]
