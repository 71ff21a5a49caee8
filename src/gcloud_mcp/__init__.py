"""MCP server that drives Google Cloud through the gcloud CLI."""

__version__ = "1.0.0"
