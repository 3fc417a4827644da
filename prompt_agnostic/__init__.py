"""Convert AI coding assistant configuration between tool formats."""

from prompt_agnostic.canonical import CanonicalPackage, ConversionResult, Format, PackageIdentity, Subtype
from prompt_agnostic.compilers import CompileOptions, convert, score_formats
from prompt_agnostic.parsers import detect_format, parse
from prompt_agnostic.scoring import ScoringPolicy

__version__ = "0.1.0"

__all__ = [
    "CanonicalPackage",
    "CompileOptions",
    "ConversionResult",
    "Format",
    "PackageIdentity",
    "ScoringPolicy",
    "Subtype",
    "convert",
    "detect_format",
    "parse",
    "score_formats",
]
