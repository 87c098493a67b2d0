"""Dot-notation paths into instruction trees.

A path such as ``"0.2.1"`` addresses ``items[0].children[2].children[1]``.
"""

from collections.abc import Iterator, Sequence

from contentbridge.models.content import InstructionItem, Instructions


def generate_path(indices: Sequence[int]) -> str:
    """Build a path string from positional indices."""
    return ".".join(str(i) for i in indices)


def navigate_to_path(instructions: Instructions, path: str) -> InstructionItem | None:
    """Return the item at ``path``, or None if the path is malformed or out of range."""
    if not path or not instructions.items:
        return None
    try:
        indices = [int(part) for part in path.split(".")]
    except ValueError:
        return None
    if any(i < 0 for i in indices):
        return None

    level: list[InstructionItem] | None = instructions.items
    current: InstructionItem | None = None
    for index in indices:
        if not level or index >= len(level):
            return None
        current = level[index]
        level = current.children
    return current


def iter_items_with_paths(
    instructions: Instructions,
) -> Iterator[tuple[str, InstructionItem]]:
    """Yield ``(path, item)`` for every item in pre-order."""

    def walk(
        items: list[InstructionItem], prefix: tuple[int, ...]
    ) -> Iterator[tuple[str, InstructionItem]]:
        for index, item in enumerate(items):
            indices = (*prefix, index)
            yield generate_path(indices), item
            if item.children:
                yield from walk(item.children, indices)

    yield from walk(instructions.items, ())
