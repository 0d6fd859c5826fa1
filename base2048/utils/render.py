"""Plain-text rendering of a grid."""

from numpy import ndarray


def render_grid(grid: ndarray, empty: str = '.') -> str:
    """
    Render the grid as aligned text, one line per row.

    Parameters
    ----------
    grid : ndarray
        The grid to render.
    empty : str, optional
        Symbol shown for empty cells (default is '.').

    Returns
    -------
    str
        The rendered grid.
    """
    width = max(len(str(int(grid.max()))), len(empty)) if grid.size else len(empty)
    lines = []
    for row in grid.tolist():
        cells = [(str(value) if value else empty).rjust(width) for value in row]
        lines.append(' '.join(cells))
    return '\n'.join(lines)
