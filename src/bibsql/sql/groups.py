"""Flatten the group tree into ``groups`` and ``entry_group`` rows.

Group ids are assigned in pre-order: a node gets the next free id, then its
children are numbered in listed order before any later sibling. The two
emitters here each walk the tree on their own and never share ids; since the
walk is deterministic and the tree is frozen, both derive the same id for
the same node.
"""

from collections.abc import Iterator
from dataclasses import dataclass

from bibsql.models import GroupNode
from bibsql.sql.literals import quote

__all__ = [
    "GroupVisit",
    "emit_group_rows",
    "emit_membership_rows",
    "iter_groups",
]


@dataclass(frozen=True)
class GroupVisit:
    """A node visited during traversal with its assigned ids.

    Attributes
    ----------
    node : GroupNode
        Visited node.
    group_id : int
        Surrogate id assigned to the node.
    parent_id : int
        Surrogate id of the parent (the root's caller-supplied parent id).
    """

    node: GroupNode
    group_id: int
    parent_id: int


def iter_groups(
    root: GroupNode,
    start_id: int = 1,
    root_parent_id: int | None = None,
) -> Iterator[GroupVisit]:
    """Walk the tree in pre-order, assigning consecutive ids.

    Uses an explicit stack, so arbitrarily deep trees do not hit the
    recursion limit.

    Parameters
    ----------
    root : GroupNode
        Root of the tree.
    start_id : int, optional
        Id of the root, by default 1.
    root_parent_id : int | None, optional
        Parent id recorded for the root. None makes the root its own
        parent.

    Yields
    ------
    GroupVisit
        One visit per node, in pre-order.
    """
    if start_id < 1:
        raise ValueError(f"start_id must be positive, got {start_id}")

    parent_of_root = start_id if root_parent_id is None else root_parent_id
    next_id = start_id
    stack: list[tuple[GroupNode, int]] = [(root, parent_of_root)]

    while stack:
        node, parent_id = stack.pop()
        group_id = next_id
        next_id += 1
        yield GroupVisit(node=node, group_id=group_id, parent_id=parent_id)
        # Reversed so the first child is popped first
        for child in reversed(node.children):
            stack.append((child, group_id))


def emit_group_rows(
    root: GroupNode,
    start_id: int = 1,
    root_parent_id: int | None = None,
) -> tuple[list[str], int]:
    """Emit one ``groups`` row per node.

    Returns
    -------
    tuple[list[str], int]
        Statements in pre-order, and the next unused id so a caller can
        continue numbering another tree without collision.
    """
    statements: list[str] = []
    next_id = start_id
    for visit in iter_groups(root, start_id, root_parent_id):
        statements.append(
            "INSERT INTO groups (groups_id, label, parent_id) "
            f"VALUES ({visit.group_id}, {quote(visit.node.label)}, {visit.parent_id});"
        )
        next_id = visit.group_id + 1
    return statements, next_id


def emit_membership_rows(
    root: GroupNode,
    start_id: int = 1,
    root_parent_id: int | None = None,
) -> tuple[list[str], int]:
    """Emit ``entry_group`` rows for every explicit group's members.

    Non-explicit groups yield no rows but still consume an id, keeping ids
    congruent with ``emit_group_rows`` over the same tree.

    Returns
    -------
    tuple[list[str], int]
        Statements in pre-order, and the next unused id.
    """
    statements: list[str] = []
    next_id = start_id
    for visit in iter_groups(root, start_id, root_parent_id):
        next_id = visit.group_id + 1
        if not visit.node.is_explicit:
            continue
        for entry_id in visit.node.members:
            statements.append(
                "INSERT INTO entry_group (entries_id, groups_id) VALUES ("
                f"(SELECT entries_id FROM entries WHERE jabref_eid={quote(entry_id)}), "
                f"(SELECT groups_id FROM groups WHERE groups_id={quote(str(visit.group_id))}));"
            )
    return statements, next_id
