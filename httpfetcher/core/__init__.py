"""Core infrastructure shared across httpfetcher."""
