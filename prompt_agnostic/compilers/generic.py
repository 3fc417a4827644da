"""Compile to canonical package JSON."""

from __future__ import annotations

from prompt_agnostic.canonical.mapper import dumps_package
from prompt_agnostic.canonical.models import CanonicalPackage, ConversionResult, Format
from prompt_agnostic.compilers.base import BaseCompiler, CompileOptions
from prompt_agnostic.scoring import ConversionContext
from prompt_agnostic.validation.validator import SchemaValidator


class GenericCompiler(BaseCompiler):
    """Lossless: every section survives as canonical JSON."""

    FORMAT = Format.GENERIC
    VALIDATES_OUTPUT = True

    def render(
        self, pkg: CanonicalPackage, config: CompileOptions, ctx: ConversionContext
    ) -> str:
        return dumps_package(pkg) + "\n"


def to_generic(
    pkg: CanonicalPackage,
    config: CompileOptions | None = None,
    validator: SchemaValidator | None = None,
) -> ConversionResult:
    return GenericCompiler(validator).compile(pkg, config)
