import bittensor as bt


class ColoredLogger:
    """A simple logger that uses ANSI colors when calling bt.logging methods."""

    BLUE = "blue"
    YELLOW = "yellow"
    RED = "red"
    GREEN = "green"
    GRAY = "gray"
    RESET = "reset"

    _COLORS = {
        BLUE: "\033[94m",
        YELLOW: "\033[93m",
        RED: "\033[91m",
        GREEN: "\033[92m",
        GRAY: "\033[90m",
        RESET: "\033[0m",
    }

    @staticmethod
    def _colored_msg(message: str, color: str) -> str:
        """Return the colored message based on the color provided."""
        if color not in ColoredLogger._COLORS:
            # Default to no color if unsupported color is provided
            return message
        return (
            f"{ColoredLogger._COLORS[color]}{message}"
            f"{ColoredLogger._COLORS[ColoredLogger.RESET]}"
        )

    @staticmethod
    def debug(message: str, color: str = GRAY) -> None:
        bt.logging.debug(ColoredLogger._colored_msg(message, color))

    @staticmethod
    def info(message: str, color: str = BLUE) -> None:
        bt.logging.info(ColoredLogger._colored_msg(message, color))

    @staticmethod
    def warning(message: str, color: str = YELLOW) -> None:
        bt.logging.warning(ColoredLogger._colored_msg(message, color))

    @staticmethod
    def error(message: str, color: str = RED) -> None:
        bt.logging.error(ColoredLogger._colored_msg(message, color))

    @staticmethod
    def success(message: str, color: str = GREEN) -> None:
        bt.logging.success(ColoredLogger._colored_msg(message, color))
