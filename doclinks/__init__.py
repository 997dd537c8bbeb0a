"""Extract and validate links in Markdown and MDX documentation."""

__version__ = "0.1.0"
