"""ragcall - retrieval and tool-calling query engine."""

__version__ = "0.1.0"
