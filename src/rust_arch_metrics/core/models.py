"""Data models for the extraction-and-measurement pipeline.

Extraction produces one ``FileExtraction`` per source file (partial type
records plus impl blocks); the aggregator folds those into an
``AnalysisModel`` of fully resolved ``TypeRecord`` objects; the metrics engine
turns each record into an immutable ``AnalysisResult``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

METRIC_NAMES = ("lcom", "cbo", "wmc")


@dataclass(frozen=True)
class SourceFile:
    """A (path, text) pair handed to the pipeline by file discovery."""

    path: Path
    text: str


@dataclass
class FieldRecord:
    """A declared field and the base type names found in its type.

    Attributes:
        name: Field name (``"0"``, ``"1"``... for tuple structs)
        type_text: Declared type exactly as written in the source
        type_refs: Base type names referenced by the declared type
    """

    name: str
    type_text: str
    type_refs: set[str] = field(default_factory=set)


@dataclass
class MethodRecord:
    """One method found in an impl block.

    Attributes:
        name: Method name
        accessed_fields: Names accessed as ``self.<name>`` in the body
        cyclomatic_complexity: 1 + number of branch points in the body
        has_receiver: Whether the method takes ``self`` in any form
        signature_type_refs: Base type names in parameter and return position
        body_type_refs: Type names used as struct literals or path qualifiers
            inside the body
        trait_name: Trait of the enclosing impl block, None for inherent impls
    """

    name: str
    accessed_fields: set[str] = field(default_factory=set)
    cyclomatic_complexity: int = 1
    has_receiver: bool = False
    signature_type_refs: set[str] = field(default_factory=set)
    body_type_refs: set[str] = field(default_factory=set)
    trait_name: str | None = None

    def to_debug_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "accessed_fields": sorted(self.accessed_fields),
            "cyclomatic_complexity": self.cyclomatic_complexity,
            "has_receiver": self.has_receiver,
            "signature_type_refs": sorted(self.signature_type_refs),
            "body_type_refs": sorted(self.body_type_refs),
            "trait": self.trait_name,
        }


@dataclass
class TypeRecord:
    """A struct-like type definition and everything known about it.

    During extraction only ``name``, ``kind``, ``file_path`` and the field
    data are filled in. The aggregator adds methods, traits and the
    local/external classification of referenced type names.
    """

    name: str
    kind: str = "struct"
    file_path: str = ""
    field_records: list[FieldRecord] = field(default_factory=list)
    methods: dict[str, MethodRecord] = field(default_factory=dict)
    external_type_refs: set[str] = field(default_factory=set)
    local_type_refs: set[str] = field(default_factory=set)
    implemented_traits: set[str] = field(default_factory=set)
    # enum variant payload types; enums have no fields of their own
    variant_type_refs: set[str] = field(default_factory=set)

    @property
    def fields(self) -> list[str]:
        """Field names in declaration order."""
        return [f.name for f in self.field_records]

    @property
    def field_type_refs(self) -> set[str]:
        refs: set[str] = set(self.variant_type_refs)
        for field_record in self.field_records:
            refs |= field_record.type_refs
        return refs

    @property
    def method_count(self) -> int:
        return len(self.methods)

    def to_debug_dict(self) -> dict[str, Any]:
        """Dump the full record for ``--debug-type`` output."""
        return {
            "name": self.name,
            "kind": self.kind,
            "file_path": self.file_path,
            "fields": [
                {"name": f.name, "type": f.type_text} for f in self.field_records
            ],
            "methods": [m.to_debug_dict() for m in self.methods.values()],
            "local_type_refs": sorted(self.local_type_refs),
            "external_type_refs": sorted(self.external_type_refs),
            "implemented_traits": sorted(self.implemented_traits),
        }


@dataclass
class ImplBlock:
    """Methods of one ``impl`` block, keyed to the implementing type's name."""

    owner: str
    methods: list[MethodRecord] = field(default_factory=list)
    trait_name: str | None = None
    file_path: str = ""


@dataclass
class FileExtraction:
    """Everything the extractor found in one source file.

    Attributes:
        file_path: Path of the source file
        types: Partial type records (fields only) in declaration order
        impl_blocks: Impl blocks in declaration order
    """

    file_path: str
    types: list[TypeRecord] = field(default_factory=list)
    impl_blocks: list[ImplBlock] = field(default_factory=list)


# ── Run diagnostics ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class SkippedFile:
    """A file left out of the analysis (unparseable or unreadable)."""

    file_path: str
    reason: str

    @property
    def message(self) -> str:
        return f"Skipped {self.file_path}: {self.reason}"


@dataclass(frozen=True)
class MethodCollision:
    """Two impl blocks define the same method name for one type."""

    type_name: str
    method_name: str
    kept_from: str
    dropped_from: str

    @property
    def message(self) -> str:
        return (
            f"{self.type_name}::{self.method_name} defined in more than one impl "
            f"block ({self.dropped_from} replaced by {self.kept_from})"
        )


@dataclass(frozen=True)
class TypeCollision:
    """Two files define a type with the same name."""

    type_name: str
    kept_from: str
    dropped_from: str

    @property
    def message(self) -> str:
        return (
            f"Type {self.type_name} defined more than once "
            f"({self.dropped_from} replaced by {self.kept_from})"
        )


@dataclass
class AnalysisModel:
    """Resolved model: type name -> TypeRecord, plus merge diagnostics."""

    types: dict[str, TypeRecord] = field(default_factory=dict)
    method_collisions: list[MethodCollision] = field(default_factory=list)
    type_collisions: list[TypeCollision] = field(default_factory=list)

    @property
    def universe(self) -> frozenset[str]:
        """Names of all locally defined types."""
        return frozenset(self.types)


class AnalysisResult(BaseModel):
    """Metrics for one type. Immutable once produced."""

    model_config = ConfigDict(frozen=True)

    type_name: str
    lcom: float = Field(..., ge=0.0, le=1.0, description="Henderson-Sellers LCOM")
    cbo: int = Field(..., ge=0, description="Coupling between objects")
    wmc: int = Field(..., ge=0, description="Weighted methods per class")

    def to_row(self, metrics: tuple[str, ...] = METRIC_NAMES) -> dict[str, Any]:
        """Flatten to a report row with only the selected metrics."""
        row: dict[str, Any] = {"struct_name": self.type_name}
        for metric in METRIC_NAMES:
            if metric in metrics:
                row[metric] = getattr(self, metric)
        return row
