import os
import shlex
from typing import List, Optional
from textual.app import App, ComposeResult
from textual.widgets import Footer, TextArea
from textual.containers import VerticalScroll, Vertical
from textual.binding import Binding
from textual.message import Message
from ..engine import BoltEngine
from ..utils.state import BoltState
from ..utils.highlighter import highlight_disassembly
from .widgets import AssemblyView, StatusBar
from .flags_palette import FlagsPopup

# User Palette
C_BG = "#EBEEEE"
C_TEXT = "#191A1A"
C_ACCENT1 = "#45d3ee" # Cyan
C_ACCENT2 = "#9FBFC5" # Muted Blue

class JaiBoltApp(App):
    """Live view of the instructions a .jai file contributes to its executable."""

    CSS = f"""
    Screen {{
        background: {C_BG};
        color: {C_TEXT};
        layers: base popups;
        align: center middle;
    }}

    #main-layout {{
        height: 1fr;
        width: 100%;
        layer: base;
    }}

    #asm-container {{
        height: 1fr;
        width: 100%;
        border: solid {C_ACCENT2};
        margin: 1 1;
    }}

    #error-view {{ color: #a80000; display: none; margin: 1 2; }}

    #status-bar {{ height: 1; padding: 0 1; background: {C_ACCENT2}; }}

    FlagsPopup {{
        display: none;
        layer: popups;
        margin: 1 1;
        width: 60;
    }}

    Footer {{ background: {C_TEXT}; color: {C_ACCENT1}; }}
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("r", "refresh", "Recompile", show=True),
        Binding("o", "toggle_flags", "Flags", show=True),
    ]

    class StateUpdated(Message):
        def __init__(self, state: BoltState) -> None:
            super().__init__()
            self.state = state

    def __init__(self, source_file: str, user_flags: Optional[List[str]] = None):
        super().__init__()
        self.engine = BoltEngine(source_file)
        self.engine.user_flags = list(user_flags or [])
        # Called from the watchdog thread; post_message is thread-safe
        self.engine.on_update_callback = lambda state: self.post_message(self.StateUpdated(state))

    def compose(self) -> ComposeResult:
        with Vertical(id="main-layout"):
            yield TextArea(id="error-view", read_only=True)
            with VerticalScroll(id="asm-container"):
                yield AssemblyView()
        yield StatusBar()
        yield FlagsPopup(id="flags-palette")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#status-bar", StatusBar).set_status(
            file=os.path.basename(self.engine.state.source_path), status="compiling"
        )
        self.engine.start()

    def action_refresh(self) -> None:
        self.query_one("#status-bar", StatusBar).set_status(status="compiling")
        self.engine.refresh()

    def action_toggle_flags(self) -> None:
        self.query_one("#flags-palette", FlagsPopup).show(self.engine.user_flags)

    def on_flags_popup_flags_changed(self, message: FlagsPopup.FlagsChanged) -> None:
        self.engine.set_flags(list(message.flags))

    def on_jai_bolt_app_state_updated(self, message: StateUpdated) -> None:
        state = message.state
        error_view = self.query_one("#error-view", TextArea)
        scroll = self.query_one("#asm-container", VerticalScroll)
        status_bar = self.query_one("#status-bar", StatusBar)

        errors = sum(1 for d in state.diagnostics if d.severity == "error")
        if state.has_errors or not state.asm_content:
            scroll.display, error_view.display = False, True
            error_view.text = state.compiler_output or "No disassembly produced."
            status = "error"
        else:
            scroll.display, error_view.display = True, False
            self.query_one("#assembly-view", AssemblyView).set_asm(
                highlight_disassembly(state.asm_content)
            )
            status = "ok"

        status_bar.set_status(
            flags=shlex.join(state.user_flags),
            status=status,
            labels=state.summary.labels,
            instructions=state.summary.instructions,
            errors=errors,
        )

    def on_unmount(self) -> None: self.engine.stop()

def run_tui(source_file: str, user_flags: Optional[List[str]] = None):
    app = JaiBoltApp(source_file, user_flags)
    app.run()
