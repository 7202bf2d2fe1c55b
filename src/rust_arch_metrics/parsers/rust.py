"""Rust syntax extractor for rust-arch-metrics."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger
from tree_sitter_language_pack import get_parser

from ..core.exceptions import ParsingError
from ..core.models import (
    FieldRecord,
    FileExtraction,
    ImplBlock,
    MethodRecord,
    TypeRecord,
)
from .type_names import base_type_name, collect_type_names, node_text

if TYPE_CHECKING:
    from tree_sitter import Node


STRUCT_LIKE_NODES = {"struct_item": "struct", "union_item": "union", "enum_item": "enum"}

# Branch points. The *_let variants come from older grammar releases.
IF_NODES = {"if_expression", "if_let_expression"}
LOOP_NODES = {
    "while_expression",
    "while_let_expression",
    "for_expression",
    "loop_expression",
}
SHORT_CIRCUIT_OPERATORS = {"&&", "||"}

# Items nested in a method body open a new scope without `self`
NESTED_SCOPE_NODES = {
    "function_item",
    "impl_item",
    "trait_item",
    "mod_item",
    "struct_item",
    "enum_item",
    "union_item",
    "macro_definition",
}

FIELD_NAME_TOKENS = {"identifier", "integer_literal"}


class RustExtractor:
    """Extracts type records and impl blocks from Rust source via tree-sitter.

    One instance owns one tree-sitter parser and is not thread-safe; the
    pipeline creates one extractor per worker thread.
    """

    language = "rust"

    def __init__(self, count_boolean_operators: bool = False) -> None:
        """Initialize Rust extractor.

        Args:
            count_boolean_operators: Count ``&&`` and ``||`` as branch points
        """
        self.count_boolean_operators = count_boolean_operators
        self._parser = get_parser("rust")
        logger.debug("Rust Tree-sitter parser initialized via tree-sitter-language-pack")

    def extract(self, content: str, file_path: Path | str = "<memory>") -> FileExtraction:
        """Parse one source file and collect its types and impl blocks.

        Args:
            content: Rust source text
            file_path: Path used for diagnostics and record provenance

        Returns:
            FileExtraction with partial type records and impl blocks

        Raises:
            ParsingError: If the source contains syntax errors
        """
        file_path = str(file_path)
        tree = self._parser.parse(content.encode("utf-8"))
        root = tree.root_node

        if root.has_error:
            line = _first_error_line(root)
            raise ParsingError(
                f"syntax error near line {line}",
                context={"file_path": file_path, "line": line},
            )

        extraction = FileExtraction(file_path=file_path)
        self._visit_items(root, extraction)

        logger.debug(
            f"Extracted {len(extraction.types)} types and "
            f"{len(extraction.impl_blocks)} impl blocks from {file_path}"
        )
        return extraction

    def _visit_items(self, node: Node, extraction: FileExtraction) -> None:
        """Recursively visit item-level nodes."""
        node_type = node.type

        if node_type in STRUCT_LIKE_NODES:
            record = self._extract_type(node, STRUCT_LIKE_NODES[node_type], extraction)
            if record is not None:
                extraction.types.append(record)
        elif node_type == "impl_item":
            block = self._extract_impl_block(node, extraction.file_path)
            if block is not None:
                extraction.impl_blocks.append(block)
            return
        elif node_type == "trait_item":
            return

        for child in node.named_children:
            self._visit_items(child, extraction)

    # ── Type definitions ────────────────────────────────────────────────

    def _extract_type(
        self, node: Node, kind: str, extraction: FileExtraction
    ) -> TypeRecord | None:
        """Extract a struct, union or enum definition."""
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return None

        record = TypeRecord(
            name=node_text(name_node), kind=kind, file_path=extraction.file_path
        )
        body = node.child_by_field_name("body")
        if body is None:
            return record

        if kind == "enum":
            # Variants are not fields; their payload types still couple
            for variant in body.named_children:
                if variant.type != "enum_variant":
                    continue
                payload = variant.child_by_field_name("body")
                if payload is not None:
                    for field_record in self._extract_fields(payload, record.name):
                        record.variant_type_refs |= field_record.type_refs
        else:
            record.field_records = self._extract_fields(body, record.name)

        return record

    def _extract_fields(self, body: Node, owner: str) -> list[FieldRecord]:
        """Extract named or positional fields from a declaration list."""
        fields: list[FieldRecord] = []

        if body.type == "field_declaration_list":
            for child in body.named_children:
                if child.type != "field_declaration":
                    continue
                name_node = child.child_by_field_name("name")
                type_node = child.child_by_field_name("type")
                if name_node is None or type_node is None:
                    continue
                fields.append(
                    FieldRecord(
                        name=node_text(name_node),
                        type_text=node_text(type_node),
                        type_refs=collect_type_names(type_node, owner),
                    )
                )
        elif body.type == "ordered_field_declaration_list":
            # Tuple struct: fields are addressed as self.0, self.1, ...
            for index, type_node in enumerate(body.children_by_field_name("type")):
                fields.append(
                    FieldRecord(
                        name=str(index),
                        type_text=node_text(type_node),
                        type_refs=collect_type_names(type_node, owner),
                    )
                )

        return fields

    # ── Impl blocks and methods ─────────────────────────────────────────

    def _extract_impl_block(self, node: Node, file_path: str) -> ImplBlock | None:
        """Extract an inherent or trait impl block."""
        owner = base_type_name(node.child_by_field_name("type"))
        if owner is None:
            logger.debug(f"Skipping impl block without a named self type in {file_path}")
            return None

        trait_node = node.child_by_field_name("trait")
        trait_name = base_type_name(trait_node) if trait_node is not None else None

        block = ImplBlock(owner=owner, trait_name=trait_name, file_path=file_path)
        body = node.child_by_field_name("body")
        if body is None:
            return block

        for item in body.named_children:
            if item.type == "function_item":
                block.methods.append(self._extract_method(item, owner, trait_name))

        return block

    def _extract_method(
        self, node: Node, owner: str, trait_name: str | None
    ) -> MethodRecord:
        """Build a MethodRecord from a function item inside an impl block."""
        name_node = node.child_by_field_name("name")
        method = MethodRecord(
            name=node_text(name_node) if name_node is not None else "unknown",
            trait_name=trait_name,
        )

        parameters = node.child_by_field_name("parameters")
        if parameters is not None:
            for param in parameters.named_children:
                if param.type == "self_parameter":
                    method.has_receiver = True
                elif param.type == "parameter":
                    pattern = param.child_by_field_name("pattern")
                    if pattern is not None and pattern.type == "self":
                        # self: Box<Self>, self: Rc<Self>, ...
                        method.has_receiver = True
                        continue
                    method.signature_type_refs |= collect_type_names(
                        param.child_by_field_name("type"), owner
                    )

        method.signature_type_refs |= collect_type_names(
            node.child_by_field_name("return_type"), owner
        )

        body = node.child_by_field_name("body")
        if body is not None:
            self._scan_body(body, method, owner)

        return method

    def _scan_body(self, body: Node, method: MethodRecord, owner: str) -> None:
        """Walk a method body once, collecting field accesses, branches and type uses.

        Branch policy: +1 per if / else-if / if-let, +1 per while / for / loop,
        +(arms - 1) per match, and +1 per && / || when enabled.
        """
        complexity = 1
        stack = list(body.named_children)

        while stack:
            node = stack.pop()
            node_type = node.type

            if node_type in NESTED_SCOPE_NODES:
                continue

            if node_type in IF_NODES or node_type in LOOP_NODES:
                complexity += 1
            elif node_type == "match_expression":
                complexity += max(0, _count_match_arms(node) - 1)
            elif node_type == "binary_expression":
                if self.count_boolean_operators:
                    operator = node.child_by_field_name("operator")
                    if operator is not None and operator.type in SHORT_CIRCUIT_OPERATORS:
                        complexity += 1
            elif node_type == "field_expression":
                if method.has_receiver:
                    accessed = _receiver_field(node)
                    if accessed is not None:
                        method.accessed_fields.add(accessed)
            elif node_type == "token_tree":
                if method.has_receiver:
                    method.accessed_fields |= _receiver_fields_in_tokens(node)
            elif node_type == "struct_expression":
                _add_body_ref(method, base_type_name(node.child_by_field_name("name")), owner)
            elif node_type == "scoped_identifier":
                path = node.child_by_field_name("path")
                if path is not None and path.type == "identifier":
                    _add_body_ref(method, node_text(path), owner)
            elif node_type == "let_declaration":
                method.body_type_refs |= collect_type_names(
                    node.child_by_field_name("type"), None
                ) - {owner}

            stack.extend(node.named_children)

        method.cyclomatic_complexity = complexity


def _first_error_line(root: Node) -> int:
    """Return the 1-based line of the first ERROR or MISSING node."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node.start_point[0] + 1
        if node.has_error:
            stack.extend(reversed(node.children))
    return root.start_point[0] + 1


def _count_match_arms(node: Node) -> int:
    body = node.child_by_field_name("body")
    if body is None:
        return 0
    return sum(1 for child in body.named_children if child.type == "match_arm")


def _receiver_field(node: Node) -> str | None:
    """Return the field name of a ``self.<field>`` expression, if it is one.

    ``self.method(...)`` and ``self.method::<T>(...)`` are method calls, not
    field accesses.
    """
    value = node.child_by_field_name("value")
    field = node.child_by_field_name("field")
    if value is None or field is None or value.type != "self":
        return None

    callee, parent = node, node.parent
    if parent is not None and parent.type == "generic_function":
        if not _is_function_of(callee, parent):
            return node_text(field)
        callee, parent = parent, parent.parent

    if (
        parent is not None
        and parent.type == "call_expression"
        and _is_function_of(callee, parent)
    ):
        return None

    return node_text(field)


def _is_function_of(node: Node, parent: Node) -> bool:
    """Whether ``node`` is the ``function`` child of a call or turbofish node."""
    function = parent.child_by_field_name("function")
    return (
        function is not None
        and function.start_byte == node.start_byte
        and function.end_byte == node.end_byte
    )


def _receiver_fields_in_tokens(node: Node) -> set[str]:
    """Find ``self.<ident>`` token sequences inside a macro token tree.

    Punctuation inside token trees is not a named node, so the dot is checked
    against the source text between the two tokens.
    """
    fields: set[str] = set()
    text = node.text
    base = node.start_byte
    tokens = node.named_children

    def gap(left: Node, right: Node) -> bytes:
        return text[left.end_byte - base : right.start_byte - base].strip()

    for i in range(len(tokens) - 1):
        receiver, name = tokens[i], tokens[i + 1]
        if receiver.type != "self" or name.type not in FIELD_NAME_TOKENS:
            continue
        if gap(receiver, name) != b".":
            continue
        following = tokens[i + 2] if i + 2 < len(tokens) else None
        if (
            following is not None
            and following.type == "token_tree"
            and gap(name, following) == b""
            and following.text.startswith(b"(")
        ):
            # self.method(...) inside a macro
            continue
        fields.add(node_text(name))

    return fields


def _add_body_ref(method: MethodRecord, name: str | None, owner: str) -> None:
    if not name or name in ("Self", owner) or not name[0].isupper():
        return
    method.body_type_refs.add(name)
