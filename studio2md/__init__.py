"""studio2md: AI Studio SDK code exports to markdown transcripts."""

from studio2md.converter import ConversionOptions, ConversionResult, convert

__version__ = "0.1.0"

__all__ = ["ConversionOptions", "ConversionResult", "convert"]
