"""Web3 learning journey backend."""
