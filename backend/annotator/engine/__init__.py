"""Annotation target resolution engine."""

from annotator.engine.registry import strategy, Tier, get_registry
from annotator.engine.context import ResolutionContext
from annotator.engine.elements import Category, ElementId, SemanticElement
from annotator.engine.semantic_registry import SemanticRegistry
from annotator.engine.resolver.annotation_resolver import AnnotationResolver, Resolution

__all__ = [
    "strategy",
    "Tier",
    "get_registry",
    "ResolutionContext",
    "Category",
    "ElementId",
    "SemanticElement",
    "SemanticRegistry",
    "AnnotationResolver",
    "Resolution",
]
