from .configuration import FlagGroupConfig, HelpGroupsSettings

__all__ = ["FlagGroupConfig", "HelpGroupsSettings"]
