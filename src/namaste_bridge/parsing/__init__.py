"""Delimited-text parsing for NAMASTE uploads."""

from namaste_bridge.parsing.parser import Delimiter, detect_delimiter, parse, split_line

__all__ = ["Delimiter", "detect_delimiter", "parse", "split_line"]
