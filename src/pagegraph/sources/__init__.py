"""Readers producing page wikitext for extraction."""

from .dump import DumpPage, iter_dump_pages
from .wikitext_file import read_wikitext

__all__ = ["DumpPage", "iter_dump_pages", "read_wikitext"]
