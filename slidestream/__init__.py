"""slidestream — incremental slide recovery from streaming LLM completions."""

__version__ = "0.1.0"
