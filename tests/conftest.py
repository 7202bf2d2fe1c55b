"""Shared fixtures for rust-arch-metrics tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from rust_arch_metrics.core.models import FieldRecord, MethodRecord, TypeRecord
from rust_arch_metrics.parsers.rust import RustExtractor

POINT_SOURCE = """
pub struct Point {
    x: f64,
    y: f64,
}

impl Point {
    pub fn new(x: f64, y: f64) -> Self {
        Point { x, y }
    }

    pub fn distance(&self) -> f64 {
        if self.x < 0.0 {
            return 0.0;
        }
        (self.x * self.x + self.y * self.y).sqrt()
    }
}
"""

WRAPPER_SOURCE = """
pub struct Wrapper {
    inner: Other,
}
"""

OTHER_SOURCE = """
pub struct Other {
    value: u32,
}

impl Other {
    pub fn value(&self) -> u32 {
        self.value
    }
}
"""


@pytest.fixture
def extractor():
    """Create Rust extractor fixture."""
    return RustExtractor()


@pytest.fixture
def point_source():
    return POINT_SOURCE


@pytest.fixture
def write_crate(tmp_path):
    """Write a {relative path: source} mapping under tmp_path and return the root."""

    def _write(files: dict[str, str]) -> Path:
        for relative, content in files.items():
            target = tmp_path / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return tmp_path

    return _write


def _make_type(
    name: str,
    fields: list[str] | None = None,
    methods: list[tuple[str, set[str], int]] | None = None,
    local_refs: set[str] | None = None,
) -> TypeRecord:
    """Build a resolved TypeRecord without going through the parser.

    Args:
        name: Type name
        fields: Field names
        methods: (name, accessed fields, cyclomatic complexity) triples
        local_refs: Local type names the type references
    """
    record = TypeRecord(
        name=name,
        field_records=[FieldRecord(name=f, type_text="u32") for f in fields or []],
        local_type_refs=set(local_refs or set()),
    )
    for method_name, accessed, complexity in methods or []:
        record.methods[method_name] = MethodRecord(
            name=method_name,
            accessed_fields=set(accessed),
            cyclomatic_complexity=complexity,
            has_receiver=bool(accessed),
        )
    return record


@pytest.fixture
def make_type():
    """Factory fixture for resolved TypeRecords."""
    return _make_type


@pytest.fixture
def wrapper_sources():
    """Wrapper and Other defined in separate files ({file name: source})."""
    return {"wrapper.rs": WRAPPER_SOURCE, "other.rs": OTHER_SOURCE}
