"""Compiler interface and the shared markdown renderer."""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar

from prompt_agnostic.canonical.models import (
    CanonicalPackage,
    ContextSection,
    ConversionResult,
    CustomSection,
    Example,
    ExamplesSection,
    Format,
    FormatExtensions,
    HookSection,
    InstructionsSection,
    MetadataSection,
    PersonaData,
    PersonaSection,
    Priority,
    Rule,
    RulesSection,
    Section,
    Subtype,
    ToolsSection,
)
from prompt_agnostic.inference.frontmatter import dump_frontmatter
from prompt_agnostic.scoring import ConversionContext, ScoringPolicy
from prompt_agnostic.taxonomy import is_valid_subtype
from prompt_agnostic.validation.validator import SchemaValidator

logger = logging.getLogger(__name__)

_BACKTICK_RUN_RE = re.compile(r"`+")


@dataclass(frozen=True)
class CompileOptions:
    scoring: ScoringPolicy = field(default_factory=ScoringPolicy)
    overrides: FormatExtensions | None = None
    globs: tuple[str, ...] | None = None
    always_apply: bool | None = None
    include_frontmatter: bool | None = None
    validate_output: bool = True


class IFormatCompiler(ABC):
    FORMAT: ClassVar[Format]

    @abstractmethod
    def compile(
        self, pkg: CanonicalPackage, config: CompileOptions | None = None
    ) -> ConversionResult:
        """Render ``pkg`` in the target format; never raises."""


def extensions_for(pkg: CanonicalPackage, config: CompileOptions) -> FormatExtensions:
    return pkg.metadata.extensions.merged(config.overrides)


def persona_prose(data: PersonaData) -> str:
    if data.name:
        parts = [f"You are {data.name}, {data.role}."]
    else:
        parts = [f"You are {data.role}."]
    if data.style:
        parts.append(f"Your communication style is {', '.join(data.style)}.")
    if data.expertise:
        items = "\n".join(f"- {item}" for item in data.expertise)
        parts.append(f"Your areas of expertise include:\n{items}")
    return "\n\n".join(parts)


def fence_for(code: str) -> str:
    """A backtick fence longer than any backtick run inside ``code``."""
    longest = max((len(run) for run in _BACKTICK_RUN_RE.findall(code)), default=0)
    return "`" * max(3, longest + 1)


def collect_tools(pkg: CanonicalPackage) -> list[str]:
    tools: list[str] = []
    for section in pkg.sections_of(ToolsSection):
        tools.extend(tool for tool in section.tools if tool not in tools)
    return tools


def is_leading(pkg: CanonicalPackage, section: Section) -> bool:
    """True when only metadata/tools sections precede ``section``."""
    for current in pkg.sections:
        if current is section:
            return True
        if not isinstance(current, (MetadataSection, ToolsSection)):
            return False
    return False


class BaseCompiler(IFormatCompiler):
    VALIDATES_OUTPUT: ClassVar[bool] = False

    def __init__(self, validator: SchemaValidator | None = None) -> None:
        self._validator = validator

    @property
    def validator(self) -> SchemaValidator:
        if self._validator is None:
            self._validator = SchemaValidator.create_default()
        return self._validator

    def compile(
        self, pkg: CanonicalPackage, config: CompileOptions | None = None
    ) -> ConversionResult:
        config = config or CompileOptions()
        ctx = ConversionContext(target=self.FORMAT, policy=config.scoring)
        try:
            content = self.render(pkg, config, ctx)
            errors: list[str] = []
            if self.VALIDATES_OUTPUT and config.validate_output:
                result = self.validator.validate_markdown(
                    self.FORMAT, content, self.schema_subtype(pkg)
                )
                errors = [str(issue) for issue in result.errors]
                for issue in result.warnings:
                    ctx.warn(f"Schema warning: {issue}")
                ctx.record_validation(errors)
        except Exception as exc:
            logger.exception("Conversion to %s failed", self.FORMAT.value)
            return ConversionResult(
                content="",
                format=self.FORMAT.value,
                warnings=[f"Conversion error: {exc}"],
                lossy_conversion=True,
                quality_score=0,
            )
        return ConversionResult(
            content=content,
            format=self.FORMAT.value,
            warnings=list(ctx.warnings),
            validation_errors=errors,
            lossy_conversion=ctx.lossy,
            quality_score=ctx.score(),
        )

    def schema_subtype(self, pkg: CanonicalPackage) -> Subtype | None:
        return pkg.subtype if is_valid_subtype(self.FORMAT, pkg.subtype) else None

    @abstractmethod
    def render(
        self, pkg: CanonicalPackage, config: CompileOptions, ctx: ConversionContext
    ) -> str:
        raise NotImplementedError


class MarkdownCompiler(BaseCompiler):
    """Render sections as markdown, one renderer per section variant."""

    INCLUDE_ICON: ClassVar[bool] = True
    SUPPORTS_PERSONA: ClassVar[bool] = True
    IMPORTANT_MARKER: ClassVar[str] = "**Important:**"
    RATIONALE_TEMPLATE: ClassVar[str] = "   - *Rationale: {}*"
    RULE_EXAMPLE_TEMPLATE: ClassVar[str] = "   - Example: `{}`"
    GOOD_PREFIX: ClassVar[str] = "✅ Good: "
    BAD_PREFIX: ClassVar[str] = "❌ Bad: "

    _RENDERERS: ClassVar[dict[type, str]] = {
        MetadataSection: "render_metadata",
        InstructionsSection: "render_instructions",
        RulesSection: "render_rules",
        ExamplesSection: "render_examples",
        ToolsSection: "render_tools",
        PersonaSection: "render_persona",
        ContextSection: "render_context",
        HookSection: "render_hook",
        CustomSection: "render_custom",
    }

    def render(
        self, pkg: CanonicalPackage, config: CompileOptions, ctx: ConversionContext
    ) -> str:
        body = self.render_document(pkg, ctx)
        return dump_frontmatter(self.frontmatter(pkg, config, ctx), body)

    def frontmatter(
        self, pkg: CanonicalPackage, config: CompileOptions, ctx: ConversionContext
    ) -> dict[str, Any]:
        return {}

    def render_document(self, pkg: CanonicalPackage, ctx: ConversionContext) -> str:
        parts = [self.render_header(pkg)]
        parts.extend(self.render_sections(pkg, ctx))
        return "\n\n".join(part for part in parts if part) + "\n"

    def render_header(self, pkg: CanonicalPackage) -> str:
        title = pkg.title
        if self.INCLUDE_ICON and pkg.icon:
            title = f"{pkg.icon} {title}"
        lines = [f"# {title}"]
        if pkg.summary:
            lines.extend(["", pkg.summary])
        return "\n".join(lines)

    def render_sections(self, pkg: CanonicalPackage, ctx: ConversionContext) -> list[str]:
        rendered: list[str] = []
        for section in pkg.sections:
            text = self.render_section(pkg, section, ctx)
            if text:
                rendered.append(text)
        return rendered

    def render_section(
        self, pkg: CanonicalPackage, section: Section, ctx: ConversionContext
    ) -> str | None:
        renderer = self._RENDERERS.get(type(section))
        if renderer is None:
            raise TypeError(f"Unknown section type: {type(section).__name__}")
        return getattr(self, renderer)(pkg, section, ctx)

    @staticmethod
    def heading(title: str, body: str) -> str:
        if not title:
            return body
        return f"## {title}\n\n{body}" if body else f"## {title}"

    def render_metadata(self, pkg: CanonicalPackage, section: MetadataSection, ctx: ConversionContext) -> str | None:
        return None

    def render_instructions(
        self, pkg: CanonicalPackage, section: InstructionsSection, ctx: ConversionContext
    ) -> str | None:
        body = section.content
        if section.priority is Priority.HIGH:
            body = f"{self.IMPORTANT_MARKER}\n\n{body}" if body else self.IMPORTANT_MARKER
        return self.heading(section.title, body)

    def render_rule(self, index: int, rule: Rule, ordered: bool) -> str:
        marker = f"{index}." if ordered else "-"
        content = rule.content.replace("\n", "\n   ")
        lines = [f"{marker} {content}"]
        if rule.rationale:
            lines.append(self.RATIONALE_TEMPLATE.format(rule.rationale))
        for example in rule.examples:
            if "\n" in example:
                code = "\n".join(f"   {line}" if line else line for line in example.splitlines())
                fence = fence_for(example)
                label = self.RULE_EXAMPLE_TEMPLATE.split("`", 1)[0].rstrip()
                lines.append(f"{label}\n   {fence}\n{code}\n   {fence}")
            else:
                lines.append(self.RULE_EXAMPLE_TEMPLATE.format(example))
        return "\n".join(lines)

    def render_rules(self, pkg: CanonicalPackage, section: RulesSection, ctx: ConversionContext) -> str | None:
        items = "\n".join(
            self.render_rule(index, rule, section.ordered)
            for index, rule in enumerate(section.items, start=1)
        )
        return f"## {section.title}\n{items}" if section.title else items

    def example_heading(self, example: Example) -> str:
        if example.good is True:
            return f"{self.GOOD_PREFIX}{example.description}"
        if example.good is False:
            return f"{self.BAD_PREFIX}{example.description}"
        return example.description

    def render_example(self, example: Example) -> str:
        parts = [f"### {self.example_heading(example)}"]
        if example.code:
            fence = fence_for(example.code)
            parts.append(f"{fence}{example.language or ''}\n{example.code}\n{fence}")
        return "\n\n".join(parts)

    def render_examples(
        self, pkg: CanonicalPackage, section: ExamplesSection, ctx: ConversionContext
    ) -> str | None:
        body = "\n\n".join(self.render_example(example) for example in section.examples)
        return self.heading(section.title, body)

    def render_tools(self, pkg: CanonicalPackage, section: ToolsSection, ctx: ConversionContext) -> str | None:
        ctx.skip("Tools")
        return None

    def render_persona_block(self, data: PersonaData) -> str:
        if data.name:
            lead = f"**{data.name}** - {data.role}"
            if data.icon:
                lead = f"{data.icon} {lead}"
        else:
            lead = f"You are {data.role}."
        parts = [lead]
        if data.style:
            parts.append(f"**Style:** {', '.join(data.style)}")
        if data.expertise:
            items = "\n".join(f"- {item}" for item in data.expertise)
            parts.append(f"**Expertise:**\n{items}")
        return "## Role\n\n" + "\n\n".join(parts)

    def render_persona(self, pkg: CanonicalPackage, section: PersonaSection, ctx: ConversionContext) -> str | None:
        if not self.SUPPORTS_PERSONA:
            ctx.skip("Persona")
            return None
        return self.render_persona_block(section.data)

    def render_context(self, pkg: CanonicalPackage, section: ContextSection, ctx: ConversionContext) -> str | None:
        return self.heading(section.title, section.content)

    def render_hook(self, pkg: CanonicalPackage, section: HookSection, ctx: ConversionContext) -> str | None:
        ctx.skip("Hook")
        return None

    def render_custom(self, pkg: CanonicalPackage, section: CustomSection, ctx: ConversionContext) -> str | None:
        if section.editor_type not in (None, self.FORMAT):
            ctx.skip(f"Custom {section.editor_type.value}")
            return None
        return self.heading(section.title or "", section.content)
