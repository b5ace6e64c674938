"""Logging Configuration with pretty formatting for actiongraph."""

import logging
import sys
from typing import Optional, Dict
from enum import Enum, IntEnum
from datetime import datetime
from pydantic import BaseModel, Field

# ANSI Color Codes
class Colors:
    """ANSI color codes for pretty terminal output."""
    INFO = '\033[94m'        # Blue
    WARNING = '\033[93m'     # Yellow
    ERROR = '\033[91m'       # Red
    RESET = '\033[0m'        # Reset
    BOLD = '\033[1m'         # Bold
    DIM = '\033[2m'          # Dim

# Pretty format strings
PRETTY_FORMAT = (
    "%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s"
)

DETAILED_FORMAT = (
    f"{Colors.DIM}%(asctime)s{Colors.RESET} │ "
    f"%(colored_level)-30s │ "
    f"{Colors.DIM}%(name)s{Colors.RESET} │ "
    f"%(message)s"
)

class PrettyFormatter(logging.Formatter):
    """Formatter that colours the level name and separates warnings."""

    level_colors = {
        'DEBUG': Colors.DIM,
        'VERBOSE': Colors.DIM,
        'INFO': Colors.INFO,
        'WARNING': Colors.WARNING,
        'ERROR': Colors.ERROR,
        'CRITICAL': Colors.ERROR + Colors.BOLD,
    }

    def format(self, record):
        color = self.level_colors.get(record.levelname, Colors.RESET)
        record.colored_level = f"{color}{record.levelname}{Colors.RESET}"

        message = super().format(record)

        if record.levelno >= logging.WARNING:
            message = f"{message}\n{Colors.DIM}{'─' * 80}{Colors.RESET}"

        return message

    def formatTime(self, record, datefmt=None):
        return datetime.fromtimestamp(record.created).strftime(datefmt or '%H:%M:%S')

class PrettyLogHandler(logging.StreamHandler):
    """Handler that writes pretty log records to stdout."""

    def __init__(self, stream=None):
        super().__init__(stream or sys.stdout)

class LogComponent(str, Enum):
    """Components that can be logged."""
    GRAPH = "actiongraph.core.graph"
    NODES = "actiongraph.core.graph.nodes"
    FLOW = "actiongraph.core.graph.flow"
    BATCH = "actiongraph.core.graph.batch"

class LogLevel(IntEnum):
    """Log levels mapped to logging module levels."""
    DEBUG = logging.DEBUG
    VERBOSE = 15  # Custom lower-than-INFO level
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

# Register custom log levels
logging.addLevelName(LogLevel.VERBOSE, "VERBOSE")

class LoggingConfig(BaseModel):
    """Configuration for logging behavior.

    Attributes:
        level: Level applied to every actiongraph component
        show_transitions: Lower the flow logger to VERBOSE so every
            ``a --[action]--> b`` step is printed
        show_retries: Keep failed-attempt warnings from node loggers visible
            even when ``level`` is above WARNING
    """
    level: LogLevel = Field(default=LogLevel.INFO)
    show_transitions: bool = Field(default=False)
    show_retries: bool = Field(default=True)

    def component_levels(self) -> Dict[LogComponent, LogLevel]:
        """Translate the toggles into per-component levels."""
        levels = {component: self.level for component in LogComponent}
        if self.show_transitions:
            levels[LogComponent.FLOW] = min(levels[LogComponent.FLOW], LogLevel.VERBOSE)
        if self.show_retries:
            levels[LogComponent.NODES] = min(levels[LogComponent.NODES], LogLevel.WARNING)
        return levels

def configure_logging(
    default_level: LogLevel = LogLevel.INFO,
    component_levels: Optional[Dict[LogComponent, LogLevel]] = None,
    pretty: bool = True,
    log_file: Optional[str] = None,
    config: Optional[LoggingConfig] = None
) -> None:
    """Configure logging with pretty formatting.

    Nothing is configured at import time; applications call this once.
    When ``config`` is given its component levels take precedence over
    ``component_levels``.
    """
    handlers = []

    # Console handler with pretty formatting
    console_handler = PrettyLogHandler() if pretty else logging.StreamHandler()
    console_handler.setFormatter(
        PrettyFormatter(DETAILED_FORMAT) if pretty else logging.Formatter(PRETTY_FORMAT)
    )
    handlers.append(console_handler)

    # File handler if specified (without colors)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(PRETTY_FORMAT))
        handlers.append(file_handler)

    root_logger = logging.getLogger()
    root_logger.setLevel(default_level.value)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    for handler in handlers:
        root_logger.addHandler(handler)

    if config is not None:
        component_levels = config.component_levels()
    elif not component_levels:
        component_levels = {component: default_level for component in LogComponent}

    for component, level in component_levels.items():
        logging.getLogger(component.value).setLevel(level.value)

def get_logger(component: LogComponent) -> logging.Logger:
    """Get a logger for a specific component."""
    return logging.getLogger(component.value)

def log_verbose(logger: logging.Logger, message: str) -> None:
    """Log a message at VERBOSE level."""
    if logger.isEnabledFor(LogLevel.VERBOSE):
        logger.log(LogLevel.VERBOSE, message)
