__version__ = "0.1.0"

from .categorize import (
    DEFAULT_CATEGORY,
    categorize_command_flags,
    render_app_help,
    render_command_help,
    uncategorized_flags,
)
from .dispatch import (
    AppHelpView,
    CommandHelpView,
    HelpDispatcher,
    HelpPayload,
    HelpTemplate,
)
from .identity import build_index, canonical
from .loggers import logger
from .registry import FlagGroup, FlagRegistry, StagingToken

__all__ = [
    "logger",
    ## identity
    "build_index",
    "canonical",
    ## registry
    "FlagGroup",
    "FlagRegistry",
    "StagingToken",
    ## categorizers
    "DEFAULT_CATEGORY",
    "categorize_command_flags",
    "render_app_help",
    "render_command_help",
    "uncategorized_flags",
    ## dispatch
    "AppHelpView",
    "CommandHelpView",
    "HelpDispatcher",
    "HelpPayload",
    "HelpTemplate",
]
