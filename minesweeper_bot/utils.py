"""Neighbor index for the Minesweeper bot."""

from typing import Dict, List, Tuple

from .board import Board, Coord

Neighborhoods = Dict[Coord, Tuple[Coord, ...]]

# Module-level cache: (rows, cols) -> {(row, col): ((nr, nc), ...), ...}
_NEIGHBORHOODS_CACHE: Dict[Tuple[int, int], Neighborhoods] = {}


def get_neighborhoods(rows: int, cols: int) -> Neighborhoods:
    """
    Precompute and cache 8-connected neighbor coordinates for every cell in a grid.

    Args:
        rows: Number of rows. Must be positive.
        cols: Number of columns. Must be positive.

    Returns:
        Mapping from each 1-indexed cell (row, col) to a tuple of valid
        neighboring coordinates, ordered row-major over the offsets.

    Raises:
        ValueError: If rows or cols is non-positive.
    """
    if rows <= 0 or cols <= 0:
        raise ValueError("rows and cols must be positive.")

    key = (rows, cols)
    cached = _NEIGHBORHOODS_CACHE.get(key)
    if cached is not None:
        return cached

    neighborhoods: Neighborhoods = {}
    for r in range(1, rows + 1):
        for c in range(1, cols + 1):
            nbrs: List[Coord] = []
            for dr in (-1, 0, 1):
                for dc in (-1, 0, 1):
                    if dr == 0 and dc == 0:
                        continue
                    nr, nc = r + dr, c + dc
                    if 1 <= nr <= rows and 1 <= nc <= cols:
                        nbrs.append((nr, nc))
            neighborhoods[(r, c)] = tuple(nbrs)

    _NEIGHBORHOODS_CACHE[key] = neighborhoods
    return neighborhoods


def neighbors(board: Board, cell: Coord) -> Tuple[Coord, ...]:
    """
    Return the up-to-8 grid-adjacent cells of `cell`, clipped at the edges.

    Raises:
        InvalidCoordinate: If `cell` lies outside the board.
    """
    board.check(*cell)
    return get_neighborhoods(board.rows, board.cols)[cell]
