"""History of entered lines, navigable with up and down."""

from __future__ import annotations

from dataclasses import dataclass, field

from termprompt.buffer import Buffer


@dataclass
class History:
    """Stores entered texts; edits made while browsing are kept until the next entry."""

    histories: list[str] = field(default_factory=list)
    tmp: list[str] = field(default_factory=lambda: [""])
    selected: int = 0

    def add(self, input: str) -> None:
        """Append ``input`` to the history."""
        self.histories.append(input)
        self.clear()

    def clear(self) -> None:
        """Drop edits made while browsing and select the new empty line."""
        self.tmp = [*self.histories, ""]
        self.selected = len(self.tmp) - 1

    def _select(self, buf: Buffer, step: int) -> Buffer:
        self.tmp[self.selected] = buf.text()
        self.selected += step
        new = Buffer()
        new.insert_text(self.tmp[self.selected], False, True)
        return new

    def older(self, buf: Buffer) -> tuple[Buffer, bool]:
        """Return a buffer holding the previous entry, and whether it changed."""
        if len(self.tmp) == 1 or self.selected == 0:
            return buf, False
        return self._select(buf, -1), True

    def newer(self, buf: Buffer) -> tuple[Buffer, bool]:
        """Return a buffer holding the next entry, and whether it changed."""
        if self.selected >= len(self.tmp) - 1:
            return buf, False
        return self._select(buf, 1), True