"""TypeScript parsing and model extraction."""

from prismagen.extraction.classifiers import (
    MarkerCommentClassifier,
    ModelClassifier,
    NamingConventionClassifier,
)
from prismagen.extraction.parser import ParsedSource, TypeScriptParser
from prismagen.extraction.type_extractor import TypeScriptTypeExtractor

__all__ = [
    "MarkerCommentClassifier",
    "ModelClassifier",
    "NamingConventionClassifier",
    "ParsedSource",
    "TypeScriptParser",
    "TypeScriptTypeExtractor",
]
