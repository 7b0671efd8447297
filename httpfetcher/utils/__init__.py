"""Utility helpers for httpfetcher."""
