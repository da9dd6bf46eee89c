"""Domain types and the transition engine."""
