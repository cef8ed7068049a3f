"""Preview model and the document open/render pipeline."""

from .model import PreviewModel
from .source import KIND_HTML, KIND_MARKDOWN, document_blocks, load_document, render_document

__all__ = [
    "KIND_HTML",
    "KIND_MARKDOWN",
    "PreviewModel",
    "document_blocks",
    "load_document",
    "render_document",
]
