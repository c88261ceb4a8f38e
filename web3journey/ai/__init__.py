"""LLM-backed learning assistant and code reviewer."""
