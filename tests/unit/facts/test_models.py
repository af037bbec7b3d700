from __future__ import annotations

from factual.core.facts.models import RESERVED_KEYS, build_fact, fact_identity


def sample_body():
    """sample description"""
    return True


def test_named_identity_is_namespace_and_name() -> None:
    assert fact_identity("pkg.x", sample_body, "adds") == "pkg.x/adds"


def test_unnamed_identity_uses_qualname_and_source_digest() -> None:
    identity = fact_identity("pkg.x", sample_body)
    assert identity.startswith("pkg.x/sample_body@")
    assert identity == fact_identity("pkg.x", sample_body)
    assert len(identity.rsplit("@", 1)[1]) == 12


def test_unnamed_identity_without_source_falls_back_to_line() -> None:
    code = compile("def generated():\n    return 1\n", "<generated>", "exec")
    scope: dict = {}
    exec(code, scope)
    identity = fact_identity("pkg.x", scope["generated"])
    assert identity == "pkg.x/generated@L1"


def test_build_fact_metadata() -> None:
    f = build_fact(sample_body, name="n", tags={"slow": True})

    assert f.namespace == __name__
    assert f.description == "sample description"
    assert f.metadata["slow"] is True
    assert f.metadata["name"] == "n"
    assert f.metadata["namespace"] == __name__
    assert f.metadata["line"] == sample_body.__code__.co_firstlineno
    assert RESERVED_KEYS <= set(f.metadata)


def test_explicit_namespace_wins() -> None:
    f = build_fact(sample_body, namespace="pkg.other")
    assert f.namespace == "pkg.other"
    assert f.id.startswith("pkg.other/")


def test_fact_is_callable_and_exposes_source() -> None:
    f = build_fact(sample_body, name="n")
    assert f() is True
    assert "def sample_body" in f.source
    assert repr(f) == f"<Fact {__name__}/n>"
