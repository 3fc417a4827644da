"""Canonical document model shared by every parser and compiler."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, ClassVar, Optional, Union

from prompt_agnostic.constants import (
    CANONICAL_FORMAT,
    CANONICAL_VERSION,
    DEFAULT_PACKAGE_VERSION,
)


class Format(str, Enum):
    CURSOR = "cursor"
    CLAUDE = "claude"
    CONTINUE = "continue"
    WINDSURF = "windsurf"
    COPILOT = "copilot"
    KIRO = "kiro"
    AGENTS_MD = "agents.md"
    GEMINI = "gemini"
    OPENCODE = "opencode"
    RULER = "ruler"
    DROID = "droid"
    TRAE = "trae"
    AIDER = "aider"
    ZENCODER = "zencoder"
    REPLIT = "replit"
    GENERIC = "generic"
    MCP = "mcp"

    @property
    def label(self) -> str:
        return FORMAT_LABELS[self]


FORMAT_LABELS: dict[Format, str] = {
    Format.CURSOR: "Cursor",
    Format.CLAUDE: "Claude",
    Format.CONTINUE: "Continue",
    Format.WINDSURF: "Windsurf",
    Format.COPILOT: "Copilot",
    Format.KIRO: "Kiro",
    Format.AGENTS_MD: "agents.md",
    Format.GEMINI: "Gemini",
    Format.OPENCODE: "OpenCode",
    Format.RULER: "Ruler",
    Format.DROID: "Droid",
    Format.TRAE: "Trae",
    Format.AIDER: "Aider",
    Format.ZENCODER: "Zencoder",
    Format.REPLIT: "Replit",
    Format.GENERIC: "Generic",
    Format.MCP: "MCP",
}


class Subtype(str, Enum):
    RULE = "rule"
    AGENT = "agent"
    SKILL = "skill"
    SLASH_COMMAND = "slash-command"
    PROMPT = "prompt"
    WORKFLOW = "workflow"
    TOOL = "tool"
    TEMPLATE = "template"
    COLLECTION = "collection"
    CHATMODE = "chatmode"
    HOOK = "hook"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class HookEvent(str, Enum):
    SESSION_START = "session-start"
    USER_PROMPT_SUBMIT = "user-prompt-submit"
    TOOL_CALL = "tool-call"
    ASSISTANT_RESPONSE = "assistant-response"


class HookLanguage(str, Enum):
    BASH = "bash"
    TYPESCRIPT = "typescript"
    JAVASCRIPT = "javascript"
    PYTHON = "python"
    BINARY = "binary"


@dataclass(frozen=True)
class Rule:
    content: str
    rationale: Optional[str] = None
    examples: tuple[str, ...] = ()


@dataclass(frozen=True)
class Example:
    description: str
    code: str
    language: Optional[str] = None
    good: Optional[bool] = None


@dataclass(frozen=True)
class PersonaData:
    role: str
    name: Optional[str] = None
    icon: Optional[str] = None
    style: tuple[str, ...] = ()
    expertise: tuple[str, ...] = ()


@dataclass(frozen=True)
class MetadataSection:
    type: ClassVar[str] = "metadata"

    title: str
    description: str = ""
    icon: Optional[str] = None
    version: Optional[str] = None
    author: Optional[str] = None


@dataclass(frozen=True)
class InstructionsSection:
    type: ClassVar[str] = "instructions"

    title: str
    content: str
    priority: Optional[Priority] = None


@dataclass(frozen=True)
class RulesSection:
    type: ClassVar[str] = "rules"

    title: str
    items: tuple[Rule, ...]
    ordered: bool = False


@dataclass(frozen=True)
class ExamplesSection:
    type: ClassVar[str] = "examples"

    title: str
    examples: tuple[Example, ...]


@dataclass(frozen=True)
class ToolsSection:
    type: ClassVar[str] = "tools"

    tools: tuple[str, ...]
    description: Optional[str] = None


@dataclass(frozen=True)
class PersonaSection:
    type: ClassVar[str] = "persona"

    data: PersonaData


@dataclass(frozen=True)
class ContextSection:
    type: ClassVar[str] = "context"

    title: str
    content: str


@dataclass(frozen=True)
class HookSection:
    type: ClassVar[str] = "hook"

    event: HookEvent
    language: HookLanguage
    code: str
    description: Optional[str] = None


@dataclass(frozen=True)
class CustomSection:
    type: ClassVar[str] = "custom"

    content: str
    editor_type: Optional[Format] = None
    title: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None


Section = Union[
    MetadataSection,
    InstructionsSection,
    RulesSection,
    ExamplesSection,
    ToolsSection,
    PersonaSection,
    ContextSection,
    HookSection,
    CustomSection,
]

SECTION_TYPES: tuple[type, ...] = (
    MetadataSection,
    InstructionsSection,
    RulesSection,
    ExamplesSection,
    ToolsSection,
    PersonaSection,
    ContextSection,
    HookSection,
    CustomSection,
)


@dataclass(frozen=True)
class ClaudeExtension:
    model: Optional[str] = None
    tools_field: Optional[str] = None
    tools_as_list: Optional[bool] = None
    argument_hint: Optional[str] = None


@dataclass(frozen=True)
class CopilotExtension:
    instruction_name: Optional[str] = None
    apply_to: Union[str, tuple[str, ...], None] = None
    exclude_agent: Optional[str] = None


@dataclass(frozen=True)
class KiroExtension:
    filename: Optional[str] = None
    inclusion: Optional[str] = None
    file_match_pattern: Optional[str] = None
    domain: Optional[str] = None
    foundational_type: Optional[str] = None


@dataclass(frozen=True)
class KiroAgentExtension:
    tools: Optional[tuple[str, ...]] = None
    mcp_servers: Optional[dict[str, Any]] = None
    tool_aliases: Optional[dict[str, str]] = None
    allowed_tools: Optional[tuple[str, ...]] = None
    tools_settings: Optional[dict[str, Any]] = None
    resources: Optional[tuple[str, ...]] = None
    hooks: Optional[dict[str, Any]] = None
    use_legacy_mcp_json: Optional[bool] = None
    model: Optional[str] = None
    prompt_file: Optional[str] = None


@dataclass(frozen=True)
class OpenCodeExtension:
    mode: Optional[str] = None
    model: Optional[str] = None
    temperature: Optional[float] = None
    permission: Optional[dict[str, Any]] = None
    disable: Optional[bool] = None
    tool_flags: Optional[dict[str, bool]] = None


@dataclass(frozen=True)
class ContinueExtension:
    globs: Union[str, tuple[str, ...], None] = None
    regex: Union[str, tuple[str, ...], None] = None
    always_apply: Optional[bool] = None
    version: Optional[str] = None
    schema: Optional[str] = None
    invokable: Optional[bool] = None


@dataclass(frozen=True)
class DroidExtension:
    argument_hint: Optional[str] = None
    allowed_tools: Optional[tuple[str, ...]] = None


@dataclass(frozen=True)
class AgentsMdExtension:
    project: Optional[str] = None
    scope: Optional[str] = None


@dataclass(frozen=True)
class WindsurfExtension:
    character_count: Optional[int] = None


@dataclass(frozen=True)
class FormatExtensions:
    """Typed per-format data that only its own format can render."""

    claude: Optional[ClaudeExtension] = None
    copilot: Optional[CopilotExtension] = None
    kiro: Optional[KiroExtension] = None
    kiro_agent: Optional[KiroAgentExtension] = None
    opencode: Optional[OpenCodeExtension] = None
    continue_dev: Optional[ContinueExtension] = None
    droid: Optional[DroidExtension] = None
    agents_md: Optional[AgentsMdExtension] = None
    windsurf: Optional[WindsurfExtension] = None

    def merged(self, overrides: Optional[FormatExtensions]) -> FormatExtensions:
        if overrides is None:
            return self
        changes = {
            name: value
            for name, value in vars(overrides).items()
            if value is not None
        }
        return replace(self, **changes)


@dataclass(frozen=True)
class PackageMetadata:
    title: str = ""
    description: str = ""
    icon: Optional[str] = None
    version: Optional[str] = None
    author: Optional[str] = None
    globs: tuple[str, ...] = ()
    always_apply: Optional[bool] = None
    extensions: FormatExtensions = field(default_factory=FormatExtensions)


@dataclass(frozen=True)
class CanonicalContent:
    sections: tuple[Section, ...]
    format: str = CANONICAL_FORMAT
    version: str = CANONICAL_VERSION


@dataclass(frozen=True)
class PackageIdentity:
    id: str
    name: str
    version: str = DEFAULT_PACKAGE_VERSION
    author: str = ""
    tags: tuple[str, ...] = ()
    description: Optional[str] = None


@dataclass(frozen=True)
class CanonicalPackage:
    id: str
    version: str
    name: str
    description: str
    author: str
    tags: frozenset[str]
    format: Format
    subtype: Subtype
    content: CanonicalContent
    metadata: PackageMetadata = field(default_factory=PackageMetadata)
    source_format: Optional[Format] = None
    format_scores: Optional[dict[Format, int]] = None

    @property
    def sections(self) -> tuple[Section, ...]:
        return self.content.sections

    @property
    def metadata_section(self) -> Optional[MetadataSection]:
        for section in self.sections:
            if isinstance(section, MetadataSection):
                return section
        return None

    @property
    def title(self) -> str:
        section = self.metadata_section
        if section is not None and section.title:
            return section.title
        return self.metadata.title or self.name

    @property
    def summary(self) -> str:
        section = self.metadata_section
        if section is not None and section.description:
            return section.description
        return self.metadata.description or self.description

    @property
    def icon(self) -> Optional[str]:
        section = self.metadata_section
        if section is not None and section.icon:
            return section.icon
        return self.metadata.icon

    def sections_of(self, kind: type) -> list[Any]:
        return [section for section in self.sections if isinstance(section, kind)]


@dataclass
class ConversionResult:
    content: str
    format: str
    warnings: list[str] = field(default_factory=list)
    validation_errors: list[str] = field(default_factory=list)
    lossy_conversion: bool = False
    quality_score: int = 100

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "content": self.content,
            "format": self.format,
            "warnings": list(self.warnings),
            "lossyConversion": self.lossy_conversion,
            "qualityScore": self.quality_score,
        }
        if self.validation_errors:
            payload["validationErrors"] = list(self.validation_errors)
        return payload
