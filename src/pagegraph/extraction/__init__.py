"""Extraction driver, binding projection and block identifiers."""

from .extractor import PageExtractor
from .hooks import HookCall, HookRegistry, PostProcessor, build_default_hooks
from .identifiers import render_sense_key, sense_iri, subject_uri_for, synthesize_block_iri
from .projection import PostProcessingError, ProjectionContext, project_bindings

__all__ = [
    "HookCall",
    "HookRegistry",
    "PageExtractor",
    "PostProcessingError",
    "PostProcessor",
    "ProjectionContext",
    "build_default_hooks",
    "project_bindings",
    "render_sense_key",
    "sense_iri",
    "subject_uri_for",
    "synthesize_block_iri",
]
