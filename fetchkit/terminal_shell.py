"""Detection of the terminal emulator and shell that started the program."""

from __future__ import annotations

import os
import re
import sys
from collections.abc import Mapping
from dataclasses import dataclass

from fetchkit.fileio import read_file_content
from fetchkit.instance import Instance
from fetchkit.parsing import str_set
from fetchkit.processing import process_stdout

PROC_DIR = "/proc"

# Programs commonly found between the terminal and us that are not the shell
_INTERMEDIATE = frozenset({"sudo", "su", "doas", "strace", "sshd", "gdb"})
_SHELLS = frozenset({"bash", "sh", "zsh", "ksh", "fish", "dash", "git-shell"})
# Process names that mean no real terminal emulator was found
_NOT_TERMINALS = frozenset({"(login)", "systemd", "init", "(init)", "0"})

# pid (comm) state ppid
_STAT = re.compile(r"\s*\S+\s*\(([^)]{1,255})\)\s*\S\s*(\S{1,255})")


@dataclass
class TerminalShellResult:
    """Shell and terminal of the current session and the user's login shell."""

    shell_process_name: str = ""
    shell_exe: str = ""
    shell_exe_name: str = ""
    shell_version: str = ""
    terminal_process_name: str = ""
    terminal_exe: str = ""
    terminal_exe_name: str = ""
    user_shell_exe: str = ""
    user_shell_exe_name: str = ""
    user_shell_version: str = ""


def _exe_name(exe: str) -> str:
    return exe.rsplit("/", 1)[-1]


def _process_exe(pid: str, process_name: str) -> str:
    command = read_file_content(f"{PROC_DIR}/{pid}/cmdline") or ""
    exe = command.split("\0", 1)[0].lstrip("-")  # login shells start with '-'
    return exe or process_name


def _walk_processes(result: TerminalShellResult, pid: str) -> None:
    while True:
        stat = read_file_content(f"{PROC_DIR}/{pid}/stat")
        if stat is None:
            return
        match = _STAT.match(stat)
        if match is None:
            return
        name, ppid = match.groups()
        if not str_set(name) or not str_set(ppid) or ppid.startswith("-") or ppid == "0":
            return

        lowered = name.lower()
        if lowered in _INTERMEDIATE:
            pid = ppid
            continue

        if lowered in _SHELLS:
            result.shell_process_name += name
            result.shell_exe = _process_exe(pid, result.shell_process_name)
            result.shell_exe_name = _exe_name(result.shell_exe)
            pid = ppid
            continue

        result.terminal_process_name += name
        result.terminal_exe = _process_exe(pid, result.terminal_process_name)
        result.terminal_exe_name = _exe_name(result.terminal_exe)
        return


def _tty_name() -> str | None:
    try:
        return os.ttyname(sys.stdin.fileno())
    except (OSError, ValueError, AttributeError):
        return None


def _terminal_from_env(result: TerminalShellResult, env: Mapping[str, str]) -> None:
    lowered = result.terminal_process_name.lower()
    if lowered and not lowered.startswith("login") and lowered not in _NOT_TERMINALS:
        return

    term: str | None = None
    if "SSH_CONNECTION" in env:
        term = env.get("SSH_TTY")
    if not str_set(term) and "WT_SESSION" in env:
        term = "Windows Terminal"
    if not str_set(term):
        term = env.get("TERM")
    if not str_set(term) or (term or "").lower() == "linux":
        term = _tty_name()

    result.terminal_process_name = term or ""
    result.terminal_exe = term or ""
    result.terminal_exe_name = _exe_name(result.terminal_exe)


def _user_shell_from_env(result: TerminalShellResult, env: Mapping[str, str]) -> None:
    result.user_shell_exe = env.get("SHELL") or ""
    result.user_shell_exe_name = _exe_name(result.user_shell_exe)

    if not result.shell_process_name and result.user_shell_exe:
        result.shell_process_name = result.user_shell_exe_name
        result.shell_exe = result.user_shell_exe
        result.shell_exe_name = _exe_name(result.shell_exe)


def _before_first(text: str, char: str) -> str:
    return text.partition(char)[0]


def _after_first(text: str, char: str) -> str:
    return text.partition(char)[2] if char in text else text


def _before_last(text: str, char: str) -> str:
    return text.rpartition(char)[0] if char in text else text


def _after_last(text: str, char: str) -> str:
    return text.rpartition(char)[2] if char in text else text


def shell_version(exe: str, exe_name: str) -> str:
    """Version of the shell at ``exe``, asked in the way its name calls for.

    Returns "" if it cannot be found out.
    """
    if not exe:
        return ""
    name = exe_name.lower()

    if name == "bash":
        output = process_stdout(
            ["env", "-i", exe, "--norc", "--noprofile", "-c", 'printf "%s" "$BASH_VERSION"']
        )
        return _before_first(output, "(")

    if name == "zsh":
        output = process_stdout([exe, "--version"])
        return _after_first(_before_last(output, " "), " ")

    if name == "fish":
        output = process_stdout([exe, "--version"])
        return _after_last(output, " ")

    command = f'printf "%s" "${exe_name.upper()}_VERSION"'
    output = _before_first(process_stdout(["env", "-i", exe, "-c", command]), "(")
    return output.replace("-release", "").replace("release", "")


def detect_terminal_shell(
    instance: Instance | None = None,
    env: Mapping[str, str] | None = None,
    pid: int | str | None = None,
) -> TerminalShellResult:
    """Find shell and terminal by walking up from process ``pid``.

    ``pid`` defaults to the parent of this process. The environment fills in
    what the process tree does not show.
    """
    if env is None:
        env = os.environ
    if pid is None:
        pid = os.getppid()

    result = TerminalShellResult()
    _walk_processes(result, str(pid))
    _terminal_from_env(result, env)
    _user_shell_from_env(result, env)

    result.shell_version = shell_version(result.shell_exe, result.shell_exe_name)
    if result.shell_exe_name.lower() != result.user_shell_exe_name.lower():
        result.user_shell_version = shell_version(
            result.user_shell_exe, result.user_shell_exe_name
        )
    else:
        result.user_shell_version = result.shell_version
    return result