"""Reference-keyed learning notes."""
