"""Model aggregation: merge per-file extractions into one resolved model.

Aggregation is the join point of the pipeline. Locality of a referenced type
name can only be decided once every file has been extracted, so this runs
strictly after extraction and is a pure function of its inputs.
"""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from .models import (
    AnalysisModel,
    FileExtraction,
    MethodCollision,
    TypeCollision,
    TypeRecord,
)


def aggregate(
    extractions: Iterable[FileExtraction], count_body_references: bool = False
) -> AnalysisModel:
    """Build the resolved model from per-file extraction results.

    Steps:
    1. Register every type definition (discovery order, last write wins).
    2. Merge impl blocks into their types (last write wins per method name).
    3. Classify referenced type names as local or external.

    Args:
        extractions: Per-file extraction results, in input order
        count_body_references: Also classify types named inside method bodies

    Returns:
        AnalysisModel with fully resolved TypeRecords and merge diagnostics
    """
    extractions = list(extractions)
    model = AnalysisModel()

    # Phase 1: the local type universe
    for extraction in extractions:
        for partial in extraction.types:
            _register_type(model, partial)

    # Phase 2: attach methods and traits
    origins: dict[tuple[str, str], str] = {}
    for extraction in extractions:
        for block in extraction.impl_blocks:
            record = model.types.get(block.owner)
            if record is None:
                logger.debug(
                    f"Ignoring impl block for non-local type {block.owner} "
                    f"in {block.file_path}"
                )
                continue

            if block.trait_name:
                record.implemented_traits.add(block.trait_name)

            label = _impl_label(block.trait_name, block.file_path)
            for method in block.methods:
                key = (record.name, method.name)
                if method.name in record.methods:
                    collision = MethodCollision(
                        type_name=record.name,
                        method_name=method.name,
                        kept_from=label,
                        dropped_from=origins[key],
                    )
                    model.method_collisions.append(collision)
                    logger.debug(collision.message)
                    # Re-insert so the surviving method takes the newest position
                    del record.methods[method.name]
                record.methods[method.name] = method
                origins[key] = label

    # Phase 3: locality resolution
    universe = model.universe
    for record in model.types.values():
        referenced = _referenced_names(record, count_body_references)
        record.local_type_refs = referenced & universe
        record.external_type_refs = referenced - universe

    logger.debug(
        f"Aggregated {len(model.types)} types from {len(extractions)} files "
        f"({len(model.method_collisions)} method collisions, "
        f"{len(model.type_collisions)} type collisions)"
    )
    return model


def _register_type(model: AnalysisModel, partial: TypeRecord) -> None:
    existing = model.types.get(partial.name)
    if existing is not None:
        collision = TypeCollision(
            type_name=partial.name,
            kept_from=partial.file_path,
            dropped_from=existing.file_path,
        )
        model.type_collisions.append(collision)
        logger.debug(collision.message)

    # Copy so the per-file extraction result stays untouched
    model.types[partial.name] = TypeRecord(
        name=partial.name,
        kind=partial.kind,
        file_path=partial.file_path,
        field_records=list(partial.field_records),
        variant_type_refs=set(partial.variant_type_refs),
    )


def _referenced_names(record: TypeRecord, count_body_references: bool) -> set[str]:
    referenced = set(record.field_type_refs)
    for method in record.methods.values():
        referenced |= method.signature_type_refs
        if count_body_references:
            referenced |= method.body_type_refs
    return referenced


def _impl_label(trait_name: str | None, file_path: str) -> str:
    label = f"impl {trait_name}" if trait_name else "inherent impl"
    return f"{label} in {file_path}"
