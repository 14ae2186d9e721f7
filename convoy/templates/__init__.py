"""Role briefings and message templates.

Templates are Jinja2 files bundled with the package:

  roles/<role>.md.j2        context handed to an agent starting in a role
  messages/<name>.md.j2     spawn, nudge, escalation and handoff notices

Rendering is strict: a field the template uses but the data lacks is an error,
never an empty string.
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError as JinjaTemplateError,
    TemplateNotFound,
    TemplateSyntaxError,
)

from ..errors import TemplateLoadError, TemplateNotFoundError, TemplateRenderError

logger = logging.getLogger("convoy.templates")

BUNDLED_TEMPLATE_DIR = Path(__file__).parent
TEMPLATE_SUFFIX = ".md.j2"

ROLE_NAMES = ["mayor", "witness", "refinery", "polecat", "crew"]
MESSAGE_NAMES = ["spawn", "nudge", "escalation", "handoff"]


@dataclass
class RoleData:
    role: str                   # mayor, witness, refinery, polecat, crew
    rig_name: str = ""          # e.g. "gastown"
    town_root: str = ""
    work_dir: str = ""
    polecat: str = ""           # polecat role only
    polecats: list[str] = field(default_factory=list)  # witness role only
    beads_dir: str = ""
    issue_prefix: str = ""


@dataclass
class SpawnData:
    issue: str
    title: str
    priority: int = 2
    description: str = ""
    branch: str = ""
    rig_name: str = ""
    polecat: str = ""


@dataclass
class NudgeData:
    polecat: str
    reason: str
    nudge_count: int = 1
    max_nudges: int = 3
    issue: str = ""
    status: str = ""


@dataclass
class EscalationData:
    polecat: str
    issue: str
    reason: str
    nudge_count: int = 0
    last_status: str = ""
    suggestions: list[str] = field(default_factory=list)


@dataclass
class HandoffData:
    role: str
    current_work: str = ""
    status: str = ""
    next_steps: list[str] = field(default_factory=list)
    notes: str = ""
    pending_mail: int = 0
    git_branch: str = ""
    git_dirty: bool = False


MessageData = Union[SpawnData, NudgeData, EscalationData, HandoffData, Mapping[str, Any]]

# Message template name -> data record it expects
MESSAGE_DATA = {
    "spawn": SpawnData,
    "nudge": NudgeData,
    "escalation": EscalationData,
    "handoff": HandoffData,
}


def _context(data: Any) -> dict:
    """Turn a data record into template variables."""
    if dataclasses.is_dataclass(data) and not isinstance(data, type):
        return dataclasses.asdict(data)
    if isinstance(data, Mapping):
        return dict(data)
    raise TypeError(f"Template data must be a dataclass or mapping, got {type(data).__name__}")


def _load_environment(directory: Path) -> Environment:
    if not directory.is_dir():
        raise TemplateLoadError(f"Template directory not found: {directory}")

    env = Environment(
        loader=FileSystemLoader(str(directory)),
        autoescape=False,  # markdown, not HTML
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )

    # Parse everything up front so a broken template fails at startup
    for name in env.list_templates(filter_func=lambda n: n.endswith(TEMPLATE_SUFFIX)):
        try:
            env.get_template(name)
        except TemplateSyntaxError as e:
            raise TemplateLoadError(f"parsing template {directory.name}/{name}: {e}") from e
    return env


class Templates:
    """Loaded role and message templates."""

    def __init__(self, template_dir: Optional[Union[str, Path]] = None):
        base = Path(template_dir).expanduser() if template_dir else BUNDLED_TEMPLATE_DIR
        self.template_dir = base
        self._roles = _load_environment(base / "roles")
        self._messages = _load_environment(base / "messages")
        logger.debug(f"Loaded templates from {base}")

    @staticmethod
    def _render(env: Environment, kind: str, name: str, data: Any) -> str:
        template_name = name + TEMPLATE_SUFFIX
        try:
            template = env.get_template(template_name)
        except TemplateNotFound as e:
            raise TemplateNotFoundError(f"{kind} template not found: {template_name}") from e

        context = _context(data)
        try:
            return template.render(**context)
        except (JinjaTemplateError, TypeError, ValueError) as e:
            raise TemplateRenderError(f"rendering {kind} template {template_name}: {e}") from e

    def render_role(self, role: str, data: RoleData) -> str:
        """Render the briefing for an agent role."""
        return self._render(self._roles, "role", role, data)

    def render_message(self, name: str, data: MessageData) -> str:
        """Render a message template.

        Args:
            name: Template name (spawn, nudge, escalation, handoff)
            data: Matching data record, or a mapping with the same fields

        Raises:
            TemplateNotFoundError: Unknown template name
            TemplateRenderError: Data is missing a field or a value does not fit the template
        """
        return self._render(self._messages, "message", name, data)

    def role_names(self) -> list[str]:
        return list(ROLE_NAMES)

    def message_names(self) -> list[str]:
        return list(MESSAGE_NAMES)
