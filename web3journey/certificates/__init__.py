"""Completion certificates and the (simulated) certificate NFT."""
