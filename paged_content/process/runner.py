import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from paged_content.logging.logger import Log


@dataclass(frozen=True)
class CommandResult:
    """Exit code and combined stdout/stderr of one external command."""

    command: tuple[str, ...]
    exit_code: int
    output: str = ""

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    @property
    def command_line(self) -> str:
        return " ".join(self.command)


def render_options(options: dict[str, str]) -> list[str]:
    """Turn ``{flag: value}`` pairs into ``flag value`` tokens, in order."""
    tokens: list[str] = []
    for flag, value in options.items():
        tokens.append(flag)
        if value != "":
            tokens.append(value)
    return tokens


class CommandRunner:
    """Runs external binaries synchronously and never raises on failure."""

    # Exit code reported when the binary could not be started at all.
    NOT_STARTED = 127

    def run(self, command: Sequence[str | Path]) -> CommandResult:
        args = tuple(str(part) for part in command)
        Log.debug(f"Running command: {' '.join(args)}")
        try:
            completed = subprocess.run(
                list(args),
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            result = CommandResult(args, self.NOT_STARTED, str(exc))
            Log.command_failed(result.command_line, result.exit_code, result.output)
            return result

        output = (completed.stdout or "") + (completed.stderr or "")
        result = CommandResult(args, completed.returncode, output)
        if not result.succeeded:
            Log.command_failed(result.command_line, result.exit_code, result.output)
        return result
