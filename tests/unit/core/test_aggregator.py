"""Unit tests for merging per-file extractions into the resolved model."""

from rust_arch_metrics.core.aggregator import aggregate
from rust_arch_metrics.core.models import (
    FieldRecord,
    FileExtraction,
    ImplBlock,
    MethodRecord,
    TypeRecord,
)


def _struct(name, file_path, **field_refs):
    return TypeRecord(
        name=name,
        file_path=file_path,
        field_records=[
            FieldRecord(name=field_name, type_text=" ".join(sorted(refs)), type_refs=set(refs))
            for field_name, refs in field_refs.items()
        ],
    )


class TestTypeRegistration:
    """Test type universe construction."""

    def test_types_in_discovery_order(self):
        extractions = [
            FileExtraction("b.rs", types=[_struct("Beta", "b.rs")]),
            FileExtraction("a.rs", types=[_struct("Alpha", "a.rs"), _struct("Gamma", "a.rs")]),
        ]
        model = aggregate(extractions)

        assert list(model.types) == ["Beta", "Alpha", "Gamma"]
        assert model.universe == frozenset({"Alpha", "Beta", "Gamma"})

    def test_duplicate_type_last_write_wins(self):
        extractions = [
            FileExtraction("one.rs", types=[_struct("Config", "one.rs", path={"String"})]),
            FileExtraction("two.rs", types=[_struct("Config", "two.rs", port={"u16"})]),
        ]
        model = aggregate(extractions)

        assert model.types["Config"].file_path == "two.rs"
        assert model.types["Config"].fields == ["port"]
        assert len(model.type_collisions) == 1
        collision = model.type_collisions[0]
        assert (collision.kept_from, collision.dropped_from) == ("two.rs", "one.rs")
        assert "Config" in collision.message

    def test_input_extractions_not_mutated(self):
        partial = _struct("Point", "p.rs")
        extraction = FileExtraction(
            "p.rs",
            types=[partial],
            impl_blocks=[ImplBlock(owner="Point", methods=[MethodRecord(name="new")])],
        )
        aggregate([extraction])

        assert partial.methods == {}


class TestImplMerging:
    """Test attaching impl blocks to types."""

    def test_impl_blocks_across_files(self):
        extractions = [
            FileExtraction("model.rs", types=[_struct("Order", "model.rs")]),
            FileExtraction(
                "ops.rs",
                impl_blocks=[
                    ImplBlock(
                        owner="Order",
                        methods=[MethodRecord(name="total", has_receiver=True)],
                        file_path="ops.rs",
                    ),
                    ImplBlock(
                        owner="Order",
                        methods=[MethodRecord(name="fmt", trait_name="Display")],
                        trait_name="Display",
                        file_path="ops.rs",
                    ),
                ],
            ),
        ]
        order = aggregate(extractions).types["Order"]

        assert list(order.methods) == ["total", "fmt"]
        assert order.implemented_traits == {"Display"}

    def test_impl_for_unknown_type_is_dropped(self):
        extractions = [
            FileExtraction(
                "ext.rs",
                impl_blocks=[
                    ImplBlock(owner="String", methods=[MethodRecord(name="shout")])
                ],
            )
        ]
        model = aggregate(extractions)

        assert model.types == {}
        assert model.method_collisions == []

    def test_method_collision_last_write_wins(self):
        first = MethodRecord(name="fmt", cyclomatic_complexity=1, trait_name="Display")
        second = MethodRecord(name="fmt", cyclomatic_complexity=4, trait_name="Debug")
        extractions = [
            FileExtraction(
                "money.rs",
                types=[_struct("Money", "money.rs")],
                impl_blocks=[
                    ImplBlock("Money", [first], trait_name="Display", file_path="money.rs"),
                    ImplBlock("Money", [MethodRecord(name="new")], file_path="money.rs"),
                    ImplBlock("Money", [second], trait_name="Debug", file_path="money.rs"),
                ],
            )
        ]
        model = aggregate(extractions)
        money = model.types["Money"]

        assert money.methods["fmt"] is second
        assert list(money.methods) == ["new", "fmt"]
        assert len(model.method_collisions) == 1
        collision = model.method_collisions[0]
        assert collision.type_name == "Money"
        assert collision.method_name == "fmt"
        assert collision.kept_from == "impl Debug in money.rs"
        assert collision.dropped_from == "impl Display in money.rs"
        assert "Money::fmt" in collision.message


class TestLocalityResolution:
    """Test the local/external split of referenced type names."""

    def test_field_and_signature_references(self):
        extractions = [
            FileExtraction(
                "wrapper.rs",
                types=[_struct("Wrapper", "wrapper.rs", inner={"Other"}, label={"String"})],
                impl_blocks=[
                    ImplBlock(
                        "Wrapper",
                        [MethodRecord(name="load", signature_type_refs={"Loader", "Result"})],
                    )
                ],
            ),
            FileExtraction("other.rs", types=[_struct("Other", "other.rs")]),
            FileExtraction("loader.rs", types=[_struct("Loader", "loader.rs")]),
        ]
        wrapper = aggregate(extractions).types["Wrapper"]

        assert wrapper.local_type_refs == {"Other", "Loader"}
        assert wrapper.external_type_refs == {"String", "Result"}

    def test_body_references_opt_in(self):
        method = MethodRecord(name="build", body_type_refs={"Helper"})
        extractions = [
            FileExtraction(
                "svc.rs",
                types=[_struct("Service", "svc.rs"), _struct("Helper", "svc.rs")],
                impl_blocks=[ImplBlock("Service", [method])],
            )
        ]

        assert aggregate(extractions).types["Service"].local_type_refs == set()
        assert aggregate(extractions, count_body_references=True).types[
            "Service"
        ].local_type_refs == {"Helper"}

    def test_enum_variant_references(self):
        shape = TypeRecord(
            name="Shape", kind="enum", file_path="s.rs", variant_type_refs={"Point", "f64"}
        )
        extractions = [
            FileExtraction("s.rs", types=[shape, _struct("Point", "s.rs")]),
        ]
        resolved = aggregate(extractions).types["Shape"]

        assert resolved.kind == "enum"
        assert resolved.local_type_refs == {"Point"}
