"""Reduce tree-sitter Rust type nodes to their base type names."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tree_sitter import Node


# Node types whose subtree never names a user-defined type
_SKIPPED_TYPE_NODES = {
    "primitive_type",
    "lifetime",
    "unit_type",
    "never_type",
    "integer_literal",
    "string_literal",
    "boolean_literal",
    "block",
}


def node_text(node: Node) -> str:
    """Decode a node's source text."""
    return node.text.decode("utf-8")


def collect_type_names(node: Node | None, self_name: str | None = None) -> set[str]:
    """Collect every named type mentioned by a type expression.

    Generic wrappers, references, pointers, arrays, slices, tuples, trait
    object bounds and path qualifiers are stripped; every type name inside is
    kept. ``Self`` is resolved to ``self_name`` when one is given.

    Args:
        node: A tree-sitter node in type position (may be None)
        self_name: Name of the enclosing type, used for ``Self``

    Returns:
        Set of base type names

    Examples:
        ``Vec<Order>``                -> {"Vec", "Order"}
        ``&'a mut crate::db::Pool``   -> {"Pool"}
        ``HashMap<String, [u8; 4]>``  -> {"HashMap", "String"}
    """
    names: set[str] = set()
    if node is None:
        return names

    stack = [node]
    while stack:
        current = stack.pop()
        node_type = current.type

        if node_type in _SKIPPED_TYPE_NODES:
            continue

        if node_type == "type_identifier":
            name = node_text(current)
            if name == "Self":
                if self_name:
                    names.add(self_name)
            else:
                names.add(name)
            continue

        if node_type == "scoped_type_identifier":
            # crate::models::Order -> Order; the path is a module path
            name_node = current.child_by_field_name("name")
            if name_node is not None:
                stack.append(name_node)
            continue

        if node_type == "type_binding":
            # Iterator<Item = Order>: "Item" is an associated type name
            bound = current.child_by_field_name("type")
            if bound is not None:
                stack.append(bound)
            continue

        stack.extend(current.named_children)

    return names


def base_type_name(node: Node | None) -> str | None:
    """Return the single base name of an impl target or trait path.

    ``Wrapper<T>`` -> ``Wrapper``, ``fmt::Display`` -> ``Display``,
    ``&Foo`` -> ``Foo``. Returns None for anything that does not name a type
    (tuples, slices, primitives).
    """
    while node is not None:
        node_type = node.type
        if node_type == "type_identifier":
            return node_text(node)
        if node_type in ("scoped_type_identifier", "scoped_identifier"):
            node = node.child_by_field_name("name")
        elif node_type in ("generic_type", "generic_type_with_turbofish"):
            node = node.child_by_field_name("type")
        elif node_type in ("reference_type", "pointer_type"):
            node = node.child_by_field_name("type")
        elif node_type == "identifier":
            return node_text(node)
        else:
            return None
    return None
