from prompt_agnostic.canonical.models import (
    SECTION_TYPES,
    AgentsMdExtension,
    CanonicalContent,
    CanonicalPackage,
    ClaudeExtension,
    ContextSection,
    ContinueExtension,
    ConversionResult,
    CopilotExtension,
    CustomSection,
    DroidExtension,
    Example,
    ExamplesSection,
    Format,
    FormatExtensions,
    HookEvent,
    HookLanguage,
    HookSection,
    InstructionsSection,
    KiroAgentExtension,
    KiroExtension,
    MetadataSection,
    OpenCodeExtension,
    PackageIdentity,
    PackageMetadata,
    PersonaData,
    PersonaSection,
    Priority,
    Rule,
    RulesSection,
    Section,
    Subtype,
    ToolsSection,
    WindsurfExtension,
)

__all__ = [
    "SECTION_TYPES",
    "AgentsMdExtension",
    "CanonicalContent",
    "CanonicalPackage",
    "ClaudeExtension",
    "ContextSection",
    "ContinueExtension",
    "ConversionResult",
    "CopilotExtension",
    "CustomSection",
    "DroidExtension",
    "Example",
    "ExamplesSection",
    "Format",
    "FormatExtensions",
    "HookEvent",
    "HookLanguage",
    "HookSection",
    "InstructionsSection",
    "KiroAgentExtension",
    "KiroExtension",
    "MetadataSection",
    "OpenCodeExtension",
    "PackageIdentity",
    "PackageMetadata",
    "PersonaData",
    "PersonaSection",
    "Priority",
    "Rule",
    "RulesSection",
    "Section",
    "Subtype",
    "ToolsSection",
    "WindsurfExtension",
]
