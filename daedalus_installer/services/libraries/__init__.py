"""Dynamic library bundling for Mach-O executables."""

from .rewriter import LibraryRewriter, needs_bundling, parse_otool_output

__all__ = ["LibraryRewriter", "needs_bundling", "parse_otool_output"]
