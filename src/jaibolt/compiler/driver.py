import logging
import shutil
import subprocess
from pathlib import Path
from typing import Tuple, List, Optional
from ..utils.config import ConfigManager

logger = logging.getLogger(__name__)

JAI_EXTENSION = ".jai"


def is_jai_source(file_path: str) -> bool:
    """Return True if the file looks like a Jai source file."""
    return Path(file_path).suffix == JAI_EXTENSION


class JaiCompilerDriver:
    """
    Compiles a .jai file into an executable and disassembles it with objdump.
    The driver never filters; callers get the whole-executable listing.
    """
    VERSION_FLAG = "-version"

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        self.config = config_manager if config_manager else ConfigManager()

        self.set_compiler(self.config.get("compiler", "jai"))
        self.set_objdump(self.config.get("objdump", "objdump"))

    def set_compiler(self, compiler: str):
        """
        Updates the compiler used by the driver.
        """
        path = shutil.which(compiler)
        if not path:
            # Don't raise so the app can start with a stale config.
            # The user gets an error when they try to compile.
            logger.warning("Compiler '%s' not found.", compiler)

        self.compiler = compiler
        self.compiler_path = path

    def set_objdump(self, objdump: str):
        path = shutil.which(objdump)
        if not path:
            logger.warning("Disassembler '%s' not found.", objdump)

        self.objdump = objdump
        self.objdump_path = path

    def version(self) -> Optional[str]:
        """First line of `<compiler> -version`, or None if unavailable."""
        if not self.compiler_path:
            return None
        try:
            result = subprocess.run(
                [self.compiler_path, self.VERSION_FLAG],
                capture_output=True,
                text=True,
                check=False
            )
        except OSError as e:
            logger.warning("Could not query compiler version: %s", e)
            return None

        output = (result.stdout or result.stderr).strip()
        return output.splitlines()[0] if output else None

    @staticmethod
    def output_path_for(source_file: str) -> str:
        """
        Without a custom metaprogram, jai writes the executable next to the
        input, named after it with the ".jai" extension stripped.
        """
        source = str(source_file)
        if source.endswith(JAI_EXTENSION):
            return source[:-len(JAI_EXTENSION)]
        return source

    def build_command(self, source_file: str, user_flags: Optional[List[str]] = None) -> List[str]:
        # Config flags first, then runtime overrides, then the input file
        command = [self.compiler_path or self.compiler]
        command.extend(self.config.get("flags", []))
        command.extend(user_flags or [])
        command.append(str(source_file))
        return command

    def disassemble_command(self, binary_path: str) -> List[str]:
        # -l: annotate with source locations, which the filter keys on
        command = [self.objdump_path or self.objdump, "-l", "-d"]
        if self.config.get("intel_syntax", True):
            command.extend(["-M", "intel"])
        command.append(str(binary_path))
        return command

    def compile(self, source_file: str, user_flags: Optional[List[str]] = None) -> Tuple[str, str]:
        """
        Compiles the source file and disassembles the resulting executable.
        Returns: (Raw objdump String, Error String)
        """
        if not self.compiler_path:
            return "", f"Compiler '{self.compiler}' not configured or not found."

        src_path = Path(source_file).resolve()
        command = self.build_command(str(src_path), user_flags)
        logger.debug("Compiling: %s", " ".join(command))

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                check=False,
                cwd=str(src_path.parent)
            )
            # jai reports errors on stdout on some platforms
            compiler_output = result.stderr or result.stdout

            if result.returncode != 0:
                return "", compiler_output

            binary_path = self.output_path_for(str(src_path))
            if not Path(binary_path).exists():
                return "", f"Expected executable '{binary_path}' was not produced.\n{compiler_output}"

            if not self.objdump_path:
                return "", f"Error: {self.objdump} not installed."

            dump = subprocess.run(
                self.disassemble_command(binary_path),
                capture_output=True,
                text=True,
                check=False
            )
            if dump.returncode != 0:
                return "", f"objdump error: {dump.stderr}"

            return dump.stdout, compiler_output

        except (OSError, subprocess.SubprocessError) as e:
            logger.exception("Compilation of %s failed", source_file)
            return "", f"Jai compilation error: {e}"
