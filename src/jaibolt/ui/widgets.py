"""
Custom Widgets
==============
Exposes: AssemblyView, StatusBar

The UI displays only the filtered disassembly.  The user edits their
.jai file in their own editor; watchdog detects saves and the view
updates live.
"""

from __future__ import annotations

from textual.widgets import Static


class AssemblyView(Static):
    """
    Main pane: shows the filtered objdump listing.
    ID: #assembly-view
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(id="assembly-view", **kwargs)

    def set_asm(self, highlighted) -> None:
        """Update the assembly pane with a Rich renderable."""
        self.update(highlighted)


class StatusBar(Static):
    """
    Bottom bar: current file, flags, compile status, line counts.
    ID: #status-bar
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(id="status-bar", **kwargs)
        self._file: str = ""
        self._flags: str = ""
        self._status: str = "idle"
        self._labels: int = 0
        self._instructions: int = 0
        self._errors: int = 0

    def set_status(
        self,
        *,
        file: str | None = None,
        flags: str | None = None,
        status: str | None = None,
        labels: int | None = None,
        instructions: int | None = None,
        errors: int | None = None,
    ) -> None:
        if file is not None:
            self._file = file
        if flags is not None:
            self._flags = flags
        if status is not None:
            self._status = status
        if labels is not None:
            self._labels = labels
        if instructions is not None:
            self._instructions = instructions
        if errors is not None:
            self._errors = errors
        self._render_bar()

    def _render_bar(self) -> str:
        parts = []
        if self._file:
            parts.append(self._file)
        if self._flags:
            parts.append(f"flags: {self._flags}")
        parts.append(f"● {self._status}")
        parts.append(f"{self._instructions} instr / {self._labels} labels")
        if self._errors:
            parts.append(f"{self._errors} error(s)")
        bar = "  │  ".join(parts)
        self.update(bar)
        return bar
