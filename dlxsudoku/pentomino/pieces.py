"""The twelve pentominoes and their orientations."""

from __future__ import annotations
from typing import Dict, List, Tuple

import numpy as np

Shape = List[Tuple[int, int]]

PENTOMINO_SIZE = 5

# One drawing per piece, '#' for a square.
PICTURES = {
    'F': (".##",
          "##.",
          ".#."),
    'I': ("#",
          "#",
          "#",
          "#",
          "#"),
    'L': ("#.",
          "#.",
          "#.",
          "##"),
    'N': (".#",
          ".#",
          "##",
          "#."),
    'P': ("##",
          "##",
          "#."),
    'T': ("###",
          ".#.",
          ".#."),
    'U': ("#.#",
          "###"),
    'V': ("#..",
          "#..",
          "###"),
    'W': ("#..",
          "##.",
          ".##"),
    'X': (".#.",
          "###",
          ".#."),
    'Y': (".#",
          "##",
          ".#",
          ".#"),
    'Z': ("##.",
          ".#.",
          ".##"),
}


def _to_array(picture) -> np.ndarray:
    return np.array([[char == '#' for char in line] for line in picture], dtype=bool)


def _to_shape(array: np.ndarray) -> Shape:
    """(x, y) squares of a piece array, sorted."""
    return sorted((int(x), int(y)) for y, x in np.argwhere(array))


# (x, y) squares of each piece in its drawn orientation.
PENTOMINOES: Dict[str, Shape] = {name: _to_shape(_to_array(pic)) for name, pic in PICTURES.items()}

PIECE_NAMES = "".join(PENTOMINOES)


def rotations(shape: Shape) -> List[Shape]:
    """List the distinct rotations and reflections of a piece."""
    width = max(x for x, _ in shape) + 1
    height = max(y for _, y in shape) + 1
    array = np.zeros((height, width), dtype=bool)
    for x, y in shape:
        array[y, x] = True

    out: List[Shape] = []
    seen = set()
    for flipped in (array, np.fliplr(array)):
        for turns in range(4):
            oriented = np.rot90(flipped, turns)
            key = (oriented.shape, oriented.tobytes())
            if key not in seen:
                seen.add(key)
                out.append(_to_shape(oriented))
    return out


# Orientations of every piece, in PIECE_NAMES order.
ORIENTATIONS: List[List[Shape]] = [rotations(PENTOMINOES[name]) for name in PIECE_NAMES]
