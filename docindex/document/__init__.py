"""Host document editing."""

from .host import HostDocument, WriteOutcome, relative_root
from .markers import BlockMerger, format_display_name

__all__ = ["BlockMerger", "HostDocument", "WriteOutcome", "format_display_name", "relative_root"]
