from __future__ import annotations

from dataclasses import dataclass, fields


@dataclass
class DirtyFlags:
    """Per-region redraw markers shared with the renderer.

    The engine only ever sets flags; a renderer clears a flag once it has
    redrawn that region.
    """

    court: bool = False
    next: bool = False
    score: bool = False
    rows: bool = False

    def invalidate(self) -> None:
        self.court = True

    def invalidate_next(self) -> None:
        self.next = True

    def invalidate_score(self) -> None:
        self.score = True

    def invalidate_rows(self) -> None:
        self.rows = True

    def invalidate_all(self) -> None:
        for f in fields(self):
            setattr(self, f.name, True)

    def consume(self, region: str) -> bool:
        """Return whether ``region`` was dirty and clear it."""
        was_dirty = bool(getattr(self, region))
        setattr(self, region, False)
        return was_dirty

    def any(self) -> bool:
        return any(getattr(self, f.name) for f in fields(self))
