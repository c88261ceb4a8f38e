"""Streaming Web3 learning assistant."""
