"""Runtime configuration for the extraction CLI."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path
from typing import Mapping


DEFAULT_SCHEMA_DIR = "configs"
DEFAULT_LANGUAGE = "de"
DEFAULT_BASE_URI = "http://wiktionary.dbpedia.org/resource/"
DEFAULT_LOG_LEVEL = "INFO"
SUPPORTED_LANGUAGES = frozenset({"de", "en"})


@dataclass(frozen=True, slots=True)
class ExtractorSettings:
    """Validated settings used to locate the schema and name resources."""

    schema_path: Path
    base_uri: str = DEFAULT_BASE_URI
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ExtractorSettings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        schema_path_raw = source.get("PAGEGRAPH_SCHEMA_PATH", "").strip()
        if schema_path_raw:
            schema_path = Path(schema_path_raw)
        else:
            schema_dir = source.get("PAGEGRAPH_SCHEMA_DIR", DEFAULT_SCHEMA_DIR).strip()
            if not schema_dir:
                raise ValueError("PAGEGRAPH_SCHEMA_DIR cannot be empty")
            language = source.get("PAGEGRAPH_LANGUAGE", DEFAULT_LANGUAGE).strip().lower()
            if language not in SUPPORTED_LANGUAGES:
                supported = ", ".join(sorted(SUPPORTED_LANGUAGES))
                raise ValueError(f"PAGEGRAPH_LANGUAGE must be one of: {supported}")
            schema_path = Path(schema_dir) / f"config-{language}.xml"

        base_uri = source.get("PAGEGRAPH_BASE_URI", DEFAULT_BASE_URI).strip()
        if not base_uri:
            raise ValueError("PAGEGRAPH_BASE_URI cannot be empty")
        if not (base_uri.startswith("http://") or base_uri.startswith("https://")):
            raise ValueError("PAGEGRAPH_BASE_URI must start with http:// or https://")

        log_level = source.get("PAGEGRAPH_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"PAGEGRAPH_LOG_LEVEL is not a logging level: {log_level}")

        return cls(schema_path=schema_path, base_uri=base_uri, log_level=log_level)
