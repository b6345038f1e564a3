"""
bookbuild - build automation for mdBook-style documentation books

Drives an external documentation tool (mdbook by default) through its test and
build commands, and moves content files around the render so they sit where
the tool expects them.

Architecture:
- Relocation Context: Manifest parsing and the move-out/move-back workaround
- Rendering Context: External tool invocation, HTML collection, build pipeline
"""

__version__ = "0.1.0"
