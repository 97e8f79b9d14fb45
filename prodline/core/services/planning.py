"""Order planning: demand breakdown derived from a cutting plan."""

from prodline.core.entities.order import LayerDefinition, MatrixRatio, OrderItem
from prodline.core.exceptions import InvalidInputError


def derive_items(
    matrix: list[MatrixRatio], layers: list[LayerDefinition]
) -> list[OrderItem]:
    """One item per (color, size) with layers > 0 and ratio > 0, quantity layers x ratio."""
    sizes = [m.size for m in matrix]
    colors = [ld.color for ld in layers]
    if len(sizes) != len(set(sizes)):
        raise InvalidInputError("matrix", "duplicate size in planned matrix", sizes)
    if len(colors) != len(set(colors)):
        raise InvalidInputError("layers", "duplicate color in planned layers", colors)

    items = [
        OrderItem(color=layer.color, size=ratio.size, quantity=layer.layers * ratio.ratio)
        for layer in layers
        if layer.layers > 0
        for ratio in matrix
        if ratio.ratio > 0
    ]
    if not items:
        raise InvalidInputError("layers", "plan produces no pieces")
    return items
