"""Routing of help render requests.

The host application asks a ``HelpDispatcher`` to render a help template
for a payload. Application help and command help are categorized first;
any other template goes to the renderer unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Iterable, Optional

from helpgroups.categorize import (
    DEFAULT_CATEGORY,
    CategorizedFlags,
    render_app_help,
    render_command_help,
)
from helpgroups.identity import Flag
from helpgroups.registry import FlagGroup, FlagRegistry

if TYPE_CHECKING:
    from helpgroups.config import HelpGroupsSettings

Renderer = Callable[["HelpTemplate | str", Any], Any]


class HelpTemplate(Enum):
    APP = "app-help"
    COMMAND = "command-help"
    OTHER = "other"

    @classmethod
    def classify(cls, identifier: "HelpTemplate | str") -> "HelpTemplate":
        """Map a template identifier to a member, unknown ones to ``OTHER``."""
        if isinstance(identifier, cls):
            return identifier
        try:
            return cls(identifier)
        except ValueError:
            return cls.OTHER


@dataclass
class HelpPayload:
    """What the host wants help for.

    Parameters
    ----------
    name : str
        Name of the application or command.
    flags : list
        Its flags, in registration order.
    source : Any, optional
        The host's own app or command object, passed through to renderers.
    """

    name: str
    flags: list[Flag] = field(default_factory=list)
    source: Any = None


@dataclass
class AppHelpView:
    payload: HelpPayload
    groups: list[FlagGroup]


@dataclass
class CommandHelpView:
    payload: HelpPayload
    categorized_flags: CategorizedFlags


class HelpDispatcher:
    """Categorize help payloads and hand them to a renderer.

    Parameters
    ----------
    registry : FlagRegistry
        Flag groups shared by every render.
    renderer : Renderer
        Called as ``renderer(template, data)``. For ``APP`` the data is an
        ``AppHelpView``, for ``COMMAND`` a ``CommandHelpView`` and for
        ``OTHER`` the template identifier and payload exactly as given.
    hidden_group : str, optional
        Group left out of application help, for example one only relevant to
        a few subcommands.
    deprecated : Iterable, optional
        Flags never shown in application help.
    default_category : str, optional
        Label for command flags no group lists.
    """

    def __init__(
        self,
        registry: FlagRegistry,
        renderer: Renderer,
        *,
        hidden_group: Optional[str] = None,
        deprecated: Iterable[Flag] = (),
        default_category: str = DEFAULT_CATEGORY,
    ) -> None:
        self.registry = registry
        self.renderer = renderer
        self.hidden_group = hidden_group
        self.deprecated = list(deprecated)
        self.default_category = default_category

    @classmethod
    def from_settings(
        cls, settings: HelpGroupsSettings, renderer: Renderer
    ) -> HelpDispatcher:
        return cls(
            settings.to_registry(),
            renderer,
            hidden_group=settings.hidden_group,
            deprecated=settings.deprecated_flags,
            default_category=settings.default_category,
        )

    def with_renderer(self, renderer: Renderer) -> HelpDispatcher:
        """A dispatcher sharing this one's registry but rendering elsewhere."""
        return HelpDispatcher(
            self.registry,
            renderer,
            hidden_group=self.hidden_group,
            deprecated=self.deprecated,
            default_category=self.default_category,
        )

    def render(self, template: HelpTemplate | str, data: Any) -> Any:
        kind = HelpTemplate.classify(template)
        match kind:
            case HelpTemplate.APP:
                return render_app_help(
                    data.flags,
                    self.registry,
                    self.hidden_group,
                    lambda groups: self.renderer(
                        kind, AppHelpView(payload=data, groups=groups)
                    ),
                    deprecated=self.deprecated,
                )
            case HelpTemplate.COMMAND:
                return render_command_help(
                    data.flags,
                    self.registry,
                    self.default_category,
                    lambda categorized: self.renderer(
                        kind,
                        CommandHelpView(
                            payload=data, categorized_flags=categorized
                        ),
                    ),
                )
            case HelpTemplate.OTHER:
                return self.renderer(template, data)
