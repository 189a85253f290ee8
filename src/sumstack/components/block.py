from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True, slots=True)
class Block:
    """A numbered tile occupying one grid cell.

    ``id`` is the identity: moving a block re-stamps ``row``/``col`` but keeps
    ``id`` and ``value``.
    """
    id: str
    value: int
    row: int
    col: int


Cell = Optional[Block]
Row = Tuple[Cell, ...]
Grid = Tuple[Row, ...]
