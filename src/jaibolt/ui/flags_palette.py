import shlex
from typing import List
from textual.widgets import Static, Input
from textual.message import Message


class FlagsPopup(Static):
    """
    Edits the extra arguments passed to the jai compiler. The text is split
    with shell quoting rules, so "-plug \"My Plugin\"" yields two arguments.
    """

    DEFAULT_CSS = """
    FlagsPopup {
        display: none;
        height: auto;
        background: #EBEEEE;
        border: solid #45d3ee;
        padding: 1 2;
    }

    FlagsPopup #flags-title {
        color: #191A1A;
        text-style: bold;
        margin-bottom: 1;
    }

    FlagsPopup #flags-error {
        color: #a80000;
        display: none;
    }
    """

    class FlagsChanged(Message):
        """Posted with the parsed argument list when the user confirms."""

        def __init__(self, flags: List[str]) -> None:
            super().__init__()
            self.flags = flags

    def compose(self):
        yield Static("Compiler arguments", id="flags-title")
        yield Input(placeholder="-release -x64", id="flags-input")
        yield Static("", id="flags-error")

    def _set_error(self, text: str):
        error = self.query_one("#flags-error", Static)
        error.update(text)
        error.display = bool(text)

    def on_input_submitted(self, event: Input.Submitted):
        event.stop()
        try:
            flags = shlex.split(event.value)
        except ValueError as e:
            # Unbalanced quotes; keep the popup open so the user can fix it
            self._set_error(f"Cannot parse arguments: {e}")
            return
        self._set_error("")
        self.display = False
        self.post_message(self.FlagsChanged(flags))

    def on_key(self, event):
        if event.key == "escape":
            event.stop()
            self._set_error("")
            self.display = False

    def show(self, flags: List[str]):
        self.display = True
        field = self.query_one("#flags-input", Input)
        field.value = shlex.join(flags)
        field.focus()
