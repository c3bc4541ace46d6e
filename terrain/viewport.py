from __future__ import annotations

from typing import NamedTuple, Protocol

from terrain.coords import ChunkPos, WorldPos, chunk_origin, chunk_position
from terrain.world import World


class Surface(Protocol):
    def move_to(self, col: int, row: int) -> None:  # pragma: no cover
        ...

    def write(self, text: str) -> None:  # pragma: no cover
        ...


class ChunkSlice(NamedTuple):
    """Visible part of one chunk.

    ``render_from``/``render_to`` are local (x, y) bounds, half-open;
    ``cursor`` is the screen (col, row) of the first visible cell.
    """

    position: ChunkPos
    render_from: tuple[int, int]
    render_to: tuple[int, int]
    cursor: tuple[int, int]

    @property
    def empty(self) -> bool:
        return (
            self.render_from[0] >= self.render_to[0]
            or self.render_from[1] >= self.render_to[1]
        )


def _clamp(v: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, v))


def _check_size(size: tuple[int, int]) -> tuple[int, int]:
    width, height = int(size[0]), int(size[1])
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be > 0")
    return width, height


def visible_chunk_range(
    camera: WorldPos, size: tuple[int, int], *, chunk_size: int
) -> tuple[ChunkPos, ChunkPos]:
    width, height = _check_size(size)
    first = chunk_position(camera, chunk_size=chunk_size)
    last = chunk_position(
        WorldPos(camera.x + width, camera.y + height), chunk_size=chunk_size
    )
    return first, last


def plan_viewport(
    camera: WorldPos, size: tuple[int, int], *, chunk_size: int
) -> list[ChunkSlice]:
    """Every chunk the viewport may touch, with its clipped draw rectangle.

    Chunks at the far edge can come back empty when the viewport ends
    exactly on a chunk boundary.
    """

    camera = WorldPos(int(camera[0]), int(camera[1]))
    width, height = _check_size(size)
    s = int(chunk_size)
    first, last = visible_chunk_range(camera, (width, height), chunk_size=s)

    out: list[ChunkSlice] = []
    for cx in range(first.x, last.x + 1):
        for cy in range(first.y, last.y + 1):
            pos = ChunkPos(cx, cy)
            origin = chunk_origin(pos, chunk_size=s)
            dx = camera.x - origin.x
            dy = camera.y - origin.y
            out.append(
                ChunkSlice(
                    position=pos,
                    render_from=(_clamp(dx, 0, s), _clamp(dy, 0, s)),
                    render_to=(_clamp(dx + width, 0, s), _clamp(dy + height, 0, s)),
                    cursor=(_clamp(-dx, 0, width - 1), _clamp(-dy, 0, height - 1)),
                )
            )
    return out


def render_viewport(
    surface: Surface, world: World, camera: WorldPos, size: tuple[int, int]
) -> int:
    """Draw the world as seen from ``camera`` and return the rows written.

    Does not clear or flush ``surface``.
    """

    plan = plan_viewport(camera, size, chunk_size=world.chunk_size)
    written = 0
    for part in plan:
        chunk = world.acquire(part.position)
        if part.empty:
            continue
        (fx, fy), (tx, ty) = part.render_from, part.render_to
        col, row = part.cursor
        for y in range(fy, ty):
            surface.move_to(col, row + (y - fy))
            surface.write(chunk.rows[y][fx:tx])
            written += 1
    return written
