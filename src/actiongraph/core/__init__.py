"""Core modules for actiongraph."""

from actiongraph.core.exceptions import (
    ActionGraphError,
    FlowError,
    FlowExecutionError,
    FlowConfigurationError,
)
from actiongraph.core.logging import configure_logging, LoggingConfig, LogLevel, LogComponent

__all__ = [
    'ActionGraphError',
    'FlowError',
    'FlowExecutionError',
    'FlowConfigurationError',
    'configure_logging',
    'LoggingConfig',
    'LogLevel',
    'LogComponent'
]
