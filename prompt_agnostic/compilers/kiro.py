"""Compile to Kiro steering files and custom agent JSON."""

from __future__ import annotations

import json
from typing import Any

from prompt_agnostic.canonical.models import (
    CanonicalPackage,
    ConversionResult,
    Format,
    InstructionsSection,
    KiroExtension,
    PersonaSection,
    Subtype,
    ToolsSection,
)
from prompt_agnostic.compilers.base import (
    CompileOptions,
    IFormatCompiler,
    MarkdownCompiler,
    collect_tools,
    extensions_for,
    is_leading,
    persona_prose,
)
from prompt_agnostic.scoring import ConversionContext
from prompt_agnostic.utils import yaml_value
from prompt_agnostic.validation.validator import SchemaValidator

DEFAULT_INCLUSION = "always"


class KiroSteeringCompiler(MarkdownCompiler):
    FORMAT = Format.KIRO
    SUPPORTS_PERSONA = False

    def frontmatter(
        self, pkg: CanonicalPackage, config: CompileOptions, ctx: ConversionContext
    ) -> dict[str, Any]:
        kiro = extensions_for(pkg, config).kiro or KiroExtension()
        inclusion = kiro.inclusion
        if not inclusion:
            ctx.warn(f"No Kiro inclusion mode set; defaulting to {DEFAULT_INCLUSION}")
            inclusion = DEFAULT_INCLUSION
        if inclusion == "fileMatch" and not kiro.file_match_pattern:
            raise ValueError("fileMatch inclusion requires fileMatchPattern")

        fm: dict[str, Any] = {"inclusion": inclusion}
        if kiro.file_match_pattern:
            fm["fileMatchPattern"] = kiro.file_match_pattern
        if kiro.domain:
            fm["domain"] = kiro.domain
        return fm


class KiroAgentCompiler(MarkdownCompiler):
    """Compile to a Kiro custom agent JSON configuration."""

    FORMAT = Format.KIRO

    def render(
        self, pkg: CanonicalPackage, config: CompileOptions, ctx: ConversionContext
    ) -> str:
        if pkg.subtype is Subtype.SLASH_COMMAND:
            ctx.penalize(
                config.scoring.unsupported_subtype_penalty,
                "Slash commands are not supported by Kiro agents",
            )
        elif pkg.subtype is Subtype.SKILL:
            ctx.penalize(
                config.scoring.degraded_subtype_penalty,
                "Skills are converted to agent prompts; some features may be lost",
            )

        extension = extensions_for(pkg, config).kiro_agent
        payload: dict[str, Any] = {"name": pkg.name}
        if pkg.summary:
            payload["description"] = pkg.summary
        if extension and extension.prompt_file:
            payload["prompt"] = extension.prompt_file
        else:
            payload["prompt"] = "\n\n".join(self.render_sections(pkg, ctx))

        tools = collect_tools(pkg)
        if not tools and extension and extension.tools:
            tools = list(extension.tools)
        if tools:
            payload["tools"] = tools
        if extension is not None:
            optional = {
                "allowedTools": extension.allowed_tools,
                "toolAliases": extension.tool_aliases,
                "toolsSettings": extension.tools_settings,
                "mcpServers": extension.mcp_servers,
                "resources": extension.resources,
                "hooks": extension.hooks,
                "useLegacyMcpJson": extension.use_legacy_mcp_json,
                "model": extension.model,
            }
            payload.update({key: yaml_value(value) for key, value in optional.items() if value is not None})
        return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"

    def render_tools(self, pkg: CanonicalPackage, section: ToolsSection, ctx: ConversionContext) -> str | None:
        return None

    def render_persona(self, pkg: CanonicalPackage, section: PersonaSection, ctx: ConversionContext) -> str | None:
        prose = persona_prose(section.data)
        return prose if is_leading(pkg, section) else f"## Role\n\n{prose}"

    def render_instructions(
        self, pkg: CanonicalPackage, section: InstructionsSection, ctx: ConversionContext
    ) -> str | None:
        extension = pkg.metadata.extensions.kiro_agent
        if extension and extension.prompt_file and section.content.startswith("Loads instructions from:"):
            return None
        return super().render_instructions(pkg, section, ctx)


class KiroCompiler(IFormatCompiler):
    """Pick the agent or steering compiler from the package subtype."""

    FORMAT = Format.KIRO

    def __init__(self, validator: SchemaValidator | None = None) -> None:
        self.steering = KiroSteeringCompiler(validator)
        self.agent = KiroAgentCompiler(validator)

    def compile(self, pkg: CanonicalPackage, config: CompileOptions | None = None) -> ConversionResult:
        if pkg.subtype is Subtype.AGENT:
            return self.agent.compile(pkg, config)
        return self.steering.compile(pkg, config)


def to_kiro(
    pkg: CanonicalPackage,
    config: CompileOptions | None = None,
    validator: SchemaValidator | None = None,
) -> ConversionResult:
    return KiroCompiler(validator).compile(pkg, config)


def to_kiro_agent(
    pkg: CanonicalPackage,
    config: CompileOptions | None = None,
    validator: SchemaValidator | None = None,
) -> ConversionResult:
    return KiroAgentCompiler(validator).compile(pkg, config)
