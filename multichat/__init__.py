"""Multi-AI Chat backend: one chat API in front of several LLM providers."""

__version__ = "1.0.0"
