"""Markdown assembly subsystem."""

from rustitect.assembler.markdown import render_document, render_summary

__all__ = [
    "render_document",
    "render_summary",
]
