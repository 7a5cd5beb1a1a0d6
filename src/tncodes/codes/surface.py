# src/tncodes/codes/surface.py
"""
Surface codes assembled from small seed codes.

Includes:
- surface_code: unrotated planar code, a diamond lattice of five-qubit
  seeds closed off by repetition-code boundaries
- almost_rotated_surface_code: rotated planar code with an arbitrary
  five-qubit seed at one bulk site
- rotated_surface_code: rotated planar code with a single logical seed at
  the centre

Every seed carries one physical data qubit; its other legs sit on the
midpoints between neighbouring seeds, where ``contract_by_coords`` fuses
them.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from tncodes.codes.simple_code import SimpleCode, gauge_code, permute_code
from tncodes.codes.small import five_qubit_surface_code
from tncodes.codes.tn_code import TensorNetworkCode
from tncodes.graph.surgery import contract_by_coords

Coords = List[Tuple[float, float]]


def _seed(code: SimpleCode, coords: Sequence[Sequence[float]]) -> TensorNetworkCode:
    return TensorNetworkCode.from_code(code).with_coords(coords)


def _check_odd(L: int) -> None:
    if L < 3 or L % 2 == 0:
        raise ValueError(f"Lattice size must be an odd integer >= 3, got {L}")


# =============================================================================
# Unrotated surface code
# =============================================================================

_DIAMOND_COORDS = [[0, 0], [3, -3], [3, 3], [0, 0.5], [-3, -3], [-3, 3]]


def _x_repetition_code() -> SimpleCode:
    return SimpleCode(
        "X repetition code",
        stabilizers=[[3, 3, 0], [0, 3, 3], [1, 1, 1]],
        logicals=[],
        pure_errors=[[1, 0, 0], [0, 0, 1], [3, 0, 0]],
    )


def _z_repetition_code() -> SimpleCode:
    return SimpleCode(
        "Z repetition code",
        stabilizers=[[1, 1, 0], [0, 1, 1], [3, 3, 3]],
        logicals=[],
        pure_errors=[[3, 0, 0], [0, 0, 3], [1, 0, 0]],
    )


def _diamond_lattice_code(rows: Sequence[Sequence[SimpleCode]]) -> TensorNetworkCode:
    """
    Contract five-qubit seeds on a diamond lattice.

    Row ``l`` (1-based) is offset horizontally by half a cell when even;
    even rows hold one seed fewer than odd rows.
    """
    width = len(rows[0])
    code = _seed(rows[0][0], _DIAMOND_COORDS)
    for l, row in enumerate(rows, start=1):
        for w, seed in enumerate(row, start=1):
            if (l, w) == (1, 1) or (l % 2 == 0 and w == width):
                continue
            offset = 0 if l % 2 == 1 else 6
            shift = (offset + 12 * (w - 1), 6 * (l - 1))
            code = contract_by_coords(code, _seed(seed, _DIAMOND_COORDS).shift_coords(shift))
    return code


def _add_boundary(
    code: TensorNetworkCode,
    seed: SimpleCode,
    coords: Coords,
    start: Tuple[float, float],
    step: Tuple[float, float],
    count: int,
) -> TensorNetworkCode:
    for c in range(count):
        shift = (start[0] + c * step[0], start[1] + c * step[1])
        code = contract_by_coords(code, _seed(seed, coords).shift_coords(shift))
    return code


def surface_code(L: int) -> TensorNetworkCode:
    """
    Unrotated planar surface code of size ``L``.

    The bulk uses the five-qubit surface-code fragment gauged into X- and
    Z-type checks; only the top-left seed keeps its logical qubit.
    """
    if L < 2:
        raise ValueError(f"Lattice size must be at least 2, got {L}")
    small = five_qubit_surface_code()
    x = gauge_code(small, 0, 1)
    z = gauge_code(small, 0, 3)
    zr = permute_code(z, [1, 4, 2, 0, 3])

    rows: List[List[SimpleCode]] = []
    for l in range(1, 2 * L):
        if l % 2 == 1:
            row = [x] * L
            row[0] = small if l == 1 else z
        else:
            row = [zr] * L
        rows.append(row)

    code = _diamond_lattice_code(rows)
    x_rep, z_rep = _x_repetition_code(), _z_repetition_code()
    span = 12 * (L - 1)
    code = _add_boundary(
        code, x_rep, [(0, 0), (0, -3), (-3, -3), (3, -3)], (6, 0), (12, 0), L - 1
    )
    code = _add_boundary(
        code, x_rep, [(0, 0), (0, 3), (-3, 3), (3, 3)], (6, span), (12, 0), L - 1
    )
    code = _add_boundary(
        code, z_rep, [(0, 0), (-3, 0), (-3, -3), (-3, 3)], (0, 6), (0, 12), L - 1
    )
    code = _add_boundary(
        code, z_rep, [(0, 0), (3, 0), (3, -3), (3, 3)], (span, 6), (0, 12), L - 1
    )
    return code


# =============================================================================
# Rotated surface code
# =============================================================================

_SEEDS: Dict[str, Tuple[List[List[int]], Coords]] = {
    "A": ([[1, 1, 1], [0, 3, 3], [3, 0, 3]],
          [(0, 0), (0, 1), (1, 0), (0.3, 0.3)]),
    "B": ([[1, 1, 0, 1], [3, 0, 0, 3], [3, 0, 3, 3], [0, 3, 0, 3]],
          [(0, 0), (0, 1), (-1, 0), (1, 0), (0.3, 0.3)]),
    "Br": ([[3, 3, 0, 3], [0, 1, 1, 1], [1, 0, 1, 1], [0, 0, 3, 3]],
           [(0, 0), (0, 1), (-1, 0), (1, 0), (0.3, 0.3)]),
    "C": ([[3, 3, 3], [0, 1, 1], [1, 0, 1]],
          [(0, 0), (0, 1), (-1, 0), (0.3, 0.3)]),
    "D": ([[0, 0, 1, 1], [0, 1, 1, 1], [3, 0, 3, 3], [1, 0, 0, 1]],
          [(0, 0), (0, 1), (0, -1), (1, 0), (0.3, 0.3)]),
    "Dr": ([[3, 3, 0, 3], [0, 3, 3, 3], [1, 0, 1, 1], [0, 1, 0, 1]],
           [(0, 0), (0, 1), (0, -1), (1, 0), (0.3, 0.3)]),
    "E": ([[0, 1, 1, 0, 1], [1, 0, 0, 1, 1], [3, 3, 0, 0, 3], [0, 0, 3, 3, 3],
           [1, 1, 0, 0, 0]],
          [(0, 0), (0, 1), (-1, 0), (0, -1), (1, 0), (0.3, 0.3)]),
    "Er": ([[0, 3, 3, 0, 3], [3, 0, 0, 3, 3], [1, 1, 0, 0, 1], [0, 0, 1, 1, 1],
            [3, 3, 0, 0, 0]],
           [(0, 0), (0, 1), (-1, 0), (0, -1), (1, 0), (0.3, 0.3)]),
    "F": ([[0, 3, 3, 3], [1, 1, 0, 1], [0, 1, 0, 1], [0, 0, 1, 1]],
          [(0, 0), (0, 1), (-1, 0), (0, -1), (0.3, 0.3)]),
    "Fr": ([[0, 1, 1, 1], [3, 3, 0, 3], [3, 0, 3, 3], [1, 0, 0, 1]],
           [(0, 0), (0, 1), (-1, 0), (0, -1), (0.3, 0.3)]),
    "G": ([[3, 3, 3], [1, 0, 1], [0, 1, 1]],
          [(0, 0), (0, -1), (1, 0), (0.3, 0.3)]),
    "H": ([[3, 3, 0, 3], [0, 1, 1, 1], [0, 3, 0, 3], [0, 0, 3, 3]],
          [(0, 0), (-1, 0), (0, -1), (1, 0), (0.3, 0.3)]),
    "Hr": ([[1, 1, 0, 1], [0, 3, 3, 3], [1, 0, 1, 1], [3, 0, 0, 3]],
           [(0, 0), (-1, 0), (0, -1), (1, 0), (0.3, 0.3)]),
    "I": ([[1, 1, 1], [3, 0, 3], [0, 3, 3]],
          [(0, 0), (-1, 0), (0, -1), (0.3, 0.3)]),
}

# Legs of a bulk seed: up, left, down, right, then the data qubit.
_BULK_COORDS: Coords = [(0, 0), (0, 1), (-1, 0), (0, -1), (1, 0), (0.3, 0.3)]


def _seed_label(i: int, j: int, L: int) -> str:
    """Seed at 1-based row ``i`` and column ``j`` of an L x L rotated lattice."""
    if (i, j) == (1, 1):
        return "A"
    if (i, j) == (1, L):
        return "C"
    if (i, j) == (L, 1):
        return "G"
    if (i, j) == (L, L):
        return "I"
    if i == 1:
        return "B" if j % 2 == 0 else "Br"
    if i == L:
        return "H" if j % 2 == 0 else "Hr"
    if j == 1:
        return "D" if i % 2 == 0 else "Dr"
    if j == L:
        return "F" if i % 2 == 0 else "Fr"
    return "E" if (i + j) % 2 == 0 else "Er"


def almost_rotated_surface_code(
    L: int,
    seed: SimpleCode,
    position: Optional[Tuple[int, int]] = None,
) -> TensorNetworkCode:
    """
    Rotated surface code of size ``L`` with ``seed`` replacing one bulk tensor.

    Parameters
    ----------
    L : int
        Odd lattice size, at least 3.
    seed : SimpleCode
        Five-qubit code; its first four qubits are the up, left, down and
        right legs and the fifth is the data qubit.
    position : (row, col), optional
        0-based bulk site of the seed; the centre by default.

    Raises
    ------
    ValueError
        If ``L`` is even or too small, the seed is not a five-qubit code, or
        ``position`` lies on the boundary.
    """
    _check_odd(L)
    if seed.n != 5:
        raise ValueError(f"Bulk seed must be a five-qubit code, got n={seed.n}")
    if position is None:
        position = (L // 2, L // 2)
    row, col = position
    if not (0 < row < L - 1 and 0 < col < L - 1):
        raise ValueError(f"Seed position {position} is not in the bulk of a {L}x{L} lattice")

    seeds = {
        name: SimpleCode(name, stabilizers, ())
        for name, (stabilizers, _) in _SEEDS.items()
    }

    code: Optional[TensorNetworkCode] = None
    for i in range(1, L + 1):
        for j in range(1, L + 1):
            if (i - 1, j - 1) == (row, col):
                piece = _seed(seed, _BULK_COORDS)
            else:
                name = _seed_label(i, j, L)
                piece = _seed(seeds[name], _SEEDS[name][1])
            piece = piece.shift_coords((2 * (j - 1), 2 * (i - 1)))
            code = piece if code is None else contract_by_coords(code, piece)
    return code


def rotated_surface_code(L: int) -> TensorNetworkCode:
    """Rotated surface code of odd size ``L`` encoding one logical qubit."""
    central = SimpleCode(
        "central",
        stabilizers=[
            [0, 1, 1, 0, 1],
            [1, 0, 0, 1, 1],
            [3, 3, 0, 0, 3],
            [0, 0, 3, 3, 3],
        ],
        logicals=[[3, 0, 3, 0, 3], [0, 1, 0, 1, 1]],
    )
    return almost_rotated_surface_code(L, central)
