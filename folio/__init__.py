"""Folio flat-file content repository.

This package models a publishing site whose pages, articles and categories are
plain text files with a metadata header. Files are addressed by their path
below a content root, cached by modification time, and organized into a path
hierarchy and a separately declared navigation menu.

The main entry point is the ContentRepository, which ties together the
path resolver, the file model cache, the renderer registry and the menu.
A small Click CLI is provided for inspecting a content tree.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
