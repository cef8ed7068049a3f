"""File explorer model and filesystem collaborators."""

from .fs import MARKDOWN_SUFFIXES, is_markdown_path, list_directory, read_file
from .model import ExplorerEntry, ExplorerModel

__all__ = [
    "ExplorerEntry",
    "ExplorerModel",
    "MARKDOWN_SUFFIXES",
    "is_markdown_path",
    "list_directory",
    "read_file",
]
