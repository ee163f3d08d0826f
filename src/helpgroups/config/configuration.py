from __future__ import annotations

from pathlib import Path
from typing import Optional, Type

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from helpgroups.categorize import DEFAULT_CATEGORY
from helpgroups.registry import FlagRegistry


class FlagGroupConfig(BaseModel):
    """One flag group as written in a configuration file."""

    name: str = Field(description="Heading the group is displayed under")
    flags: list[str] = Field(
        default_factory=list,
        description="Long option strings in display order, e.g. `--datadir`",
    )
    description: Optional[str] = None


class HelpGroupsSettings(BaseSettings):
    """
    Flag grouping configuration.

    Values come from keyword arguments, `HELPGROUPS_*` environment variables
    and a `helpgroups.yaml` file in the working directory, in that order of
    precedence.

    Examples
    --------
    >>> settings = HelpGroupsSettings(
    ...     groups=[{"name": "Networking", "flags": ["--port"]}],
    ...     hidden_group="Account Plugin",
    ... )
    >>> settings.to_registry().names()
    ['Networking']
    """

    groups: list[FlagGroupConfig] = Field(
        default_factory=list,
        description="Flag groups in display order",
    )
    fallback_group: Optional[str] = Field(
        default=None,
        description="Group that absorbs uncategorized flags (default: the last group)",
    )
    hidden_group: Optional[str] = Field(
        default=None,
        description="Group left out of the top-level help",
    )
    default_category: str = Field(
        default=DEFAULT_CATEGORY,
        description="Category of command flags that no group lists",
    )
    deprecated_flags: list[str] = Field(
        default_factory=list,
        description="Flags never shown in the top-level help",
    )
    model_config = SettingsConfigDict(
        env_prefix="HELPGROUPS_",
        yaml_file=(Path().cwd() / "helpgroups.yaml",),
        # other tools may keep their own keys in the same file
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls),
        )

    @property
    def json_schema(self) -> dict:
        """Return the JSON schema for the settings."""
        return self.model_json_schema()

    @classmethod
    def from_user_yaml(cls, path: Path) -> HelpGroupsSettings:
        """Load settings from a YAML file."""
        source = YamlConfigSettingsSource(cls, yaml_file=path)
        settings = source()
        return cls(**settings)

    def to_yaml(self, path: Path) -> None:
        """Write the settings to a YAML file."""
        import yaml  # type: ignore

        model = self.model_dump(mode="json")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w") as f:
                yaml.dump(model, f, sort_keys=False)
        except (OSError, IOError) as e:
            msg = f"Failed to save settings to {path}: {e}"
            raise ValueError(msg) from e

    def to_registry(self) -> FlagRegistry:
        """Build a fresh registry from the configured groups.

        Raises
        ------
        DuplicateGroupError
            If two groups share a name.
        """
        registry = FlagRegistry(fallback=self.fallback_group)
        for group in self.groups:
            registry.create_group(group.name, group.flags, group.description)
        return registry
