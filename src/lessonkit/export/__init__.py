"""Exporters for extracted lesson plans."""

from .markdown import export_chunk_to_markdown, export_lesson_plan_to_markdown, slugify

__all__ = ["export_chunk_to_markdown", "export_lesson_plan_to_markdown", "slugify"]
