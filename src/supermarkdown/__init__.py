"""HTML to Markdown conversion tuned for language-model input."""

from __future__ import annotations

from .converter import Converter, convert, convert_with_options
from .models import ConversionResult
from .options import HeadingStyle, LinkStyle, Options

__version__ = "0.1.0"

__all__ = [
    "ConversionResult",
    "Converter",
    "HeadingStyle",
    "LinkStyle",
    "Options",
    "__version__",
    "convert",
    "convert_with_options",
]
