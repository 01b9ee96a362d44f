"""Derived game-state analytics over play-by-play records."""
