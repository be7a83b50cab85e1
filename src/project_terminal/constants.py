DEFAULT_COMMAND_PREFIX: str = "/"

# Raw commands are truncated to this many characters before logging
LOGGED_COMMAND_CHARS: int = 100

DEFAULT_MAX_COMMAND_LENGTH: int = 500
DEFAULT_SUGGESTION_LIMIT: int = 10
DEFAULT_NOTE_LOCK_TTL_SECONDS: int = 300

HELP_SUGGESTION: str = "/help"

DEMO_MODE_MESSAGE: str = "Demo mode - account required"
