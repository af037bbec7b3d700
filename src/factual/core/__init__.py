"""Core of the factual framework: facts, registry, selection, checking, loading."""
