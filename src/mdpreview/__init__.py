"""mdpreview - preview Markdown files the way a code forge renders them."""

__version__ = "0.3.0"
