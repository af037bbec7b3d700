"""Shared utilities (YAML layering, deep merge)."""
