"""Download documentation and embed compressed indexes into AGENTS.md files."""

__version__ = "0.1.0"
