from typing import Tuple

import numpy as np

from .cells import Coord


def code_length(rows: int, cols: int) -> int:
    """Bytes needed for a rows x cols board at two cells per byte."""
    return (rows * cols + 1) // 2


def encode(board: np.ndarray) -> bytes:
    """Packs the board flags, 4 bits per cell, row-major.

    The first cell of every pair goes into the low nibble, the second one
    into the high nibble. An odd cell count leaves the last high nibble zero.
    """
    flat = board.ravel()
    if flat.size % 2:
        flat = np.append(flat, np.uint8(0))
    packed = (flat[0::2] & 0x0F) | ((flat[1::2] & 0x0F) << 4)
    return packed.astype(np.uint8).tobytes()


def decode(data: bytes, rows: int, cols: int) -> np.ndarray:
    """Inverse of encode() for a board of the given dimensions."""
    if len(data) != code_length(rows, cols):
        raise ValueError(f"expected {code_length(rows, cols)} bytes for a {rows}x{cols} board, got {len(data)}")
    packed = np.frombuffer(data, dtype=np.uint8)
    flat = np.empty(packed.size * 2, dtype=np.uint8)
    flat[0::2] = packed & 0x0F
    flat[1::2] = packed >> 4
    return flat[: rows * cols].reshape(rows, cols)


# ---- player coordinate

def coord_width(rows: int, cols: int) -> int:
    """Bytes per axis so that every in-board row and column index fits."""
    largest = max(rows, cols) - 1
    return max(1, (largest.bit_length() + 7) // 8)


def encode_player(pos: Coord, width: int) -> bytes:
    r, c = pos
    return int(r).to_bytes(width, "big") + int(c).to_bytes(width, "big")


def decode_player(data: bytes, width: int) -> Tuple[int, int]:
    return int.from_bytes(data[:width], "big"), int.from_bytes(data[width:], "big")
