import logging
from typing import Callable, List, Optional
from .compiler.driver import JaiCompilerDriver
from .parsing import process_disassembly, parse_diagnostics
from .utils.config import ConfigManager
from .utils.state import BoltState
from .utils.watcher import FileWatcher

logger = logging.getLogger(__name__)

class BoltEngine:
    """
    Compile -> disassemble -> filter loop for a single .jai file.
    Subscribers receive the updated BoltState via on_update_callback.
    """
    def __init__(self, source_file: str, config_manager: Optional[ConfigManager] = None):
        self.state = BoltState(source_path=source_file)
        self.driver = JaiCompilerDriver(config_manager)
        self.watcher = FileWatcher()
        self.on_update_callback: Optional[Callable[[BoltState], None]] = None
        self.user_flags: List[str] = []

    def start(self):
        self.refresh()
        self.watcher.start_watching(self.state.source_path, self._on_file_saved)

    def stop(self):
        self.watcher.stop_watching()

    def _on_file_saved(self, path: str):
        self.refresh()

    def set_flags(self, flags: List[str]):
        self.user_flags = flags
        self.refresh()

    def _notify(self):
        if self.on_update_callback:
            self.on_update_callback(self.state)

    def refresh(self):
        logger.info("Refreshing %s with flags %s", self.state.source_path, self.user_flags)
        try:
            with open(self.state.source_path, "r") as f:
                content = f.read()
                self.state.source_code = content
                self.state.source_lines = content.splitlines()

            raw_disasm, stderr = self.driver.compile(self.state.source_path, user_flags=self.user_flags)
            self.state.compiler_output = stderr
            self.state.user_flags = list(self.user_flags)
            self.state.diagnostics = parse_diagnostics(stderr)

            if raw_disasm:
                # The source path is the filter target; nothing is stashed on the driver.
                filtered, summary = process_disassembly(raw_disasm, self.state.source_path)
                self.state.update_asm(filtered, summary, raw_disasm)
                logger.info(
                    "Kept %d instructions under %d labels (%d lines hidden)",
                    summary.instructions, summary.labels, self.state.hidden_lines
                )
            else:
                # Never leave the previous build on screen after a failed one
                logger.warning("No disassembly produced for %s", self.state.source_path)
                self.state.clear_asm()

        except Exception as e:
            logger.exception("Refresh failed")
            self.state.compiler_output = f"Internal Engine Error: {str(e)}"
            self.state.clear_asm()

        self._notify()
