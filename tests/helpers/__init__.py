"""Test helpers for factual."""
