"""UI configuration constants.

Centralizes magic numbers and display strings for the UI module.
"""


class LogLevel:
    """Log level constants with numeric values for comparison.

    Lower numeric value = more verbose (shows more messages).
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    _names = {
        DEBUG: "DEBUG",
        INFO: "INFO",
        WARNING: "WARNING",
        ERROR: "ERROR",
    }

    _from_string = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def name(cls, level: int) -> str:
        """Get the name for a log level."""
        return cls._names.get(level, "UNKNOWN")

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Convert string to log level. Returns DEBUG if invalid."""
        return cls._from_string.get(level_str.lower(), cls.DEBUG)


APP_NAME = "Chabby"
AGENT_DISPLAY_NAME = "Chat Agent"

# Message and header timestamps
MESSAGE_TIME_FORMAT = "%H:%M"
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"

# Input history configuration
INPUT_HISTORY_MAX_SIZE = 100

# Welcome screen prompts, submitted as-is when chosen
SUGGESTED_PROMPTS = (
    "What can you help me with?",
    "Tell me a joke",
    "Explain quantum computing",
    "Give me 5 productivity tips",
)

WELCOME_TEXT = (
    "Start a conversation by typing a message below or choose one of the "
    "suggested prompts to get started."
)
