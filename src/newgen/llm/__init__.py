"""LLM provider access."""
