"""How the current process was started, and how to start it again.

``sys.orig_argv`` holds the interpreter path, the interpreter's own flags,
the program entry (a script path, ``-m module`` or ``-c command``) and the
program's arguments as they were at startup. The flags and the entry are
read from it front to back; the program's arguments come from the live
``sys.argv[1:]``, which the program may have grown or rewritten since.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass


@dataclass(frozen=True)
class Invocation:
    """The command line of a process.

    Attributes:
        executable: Path of the interpreter to launch.
        runtime_flags: Flags consumed by the interpreter itself.
        program_args: The program's argument vector. The first entry is the
            executable path; the rest is the program entry followed by its
            arguments.
    """

    executable: str
    runtime_flags: tuple[str, ...] = ()
    program_args: tuple[str, ...] = ()

    def respawn_arguments(self) -> list[str]:
        """Arguments for a replacement process (executable excluded).

        Runtime flags come first, exactly as inherited, followed by every
        program argument except the leading executable path entry.
        """
        return [*self.runtime_flags, *self.program_args[1:]]

    @classmethod
    def current(cls) -> Invocation:
        """Capture the running interpreter's invocation."""
        return cls.from_argv(
            executable=sys.executable,
            orig_argv=list(getattr(sys, "orig_argv", [sys.executable, *sys.argv])),
            argv=list(sys.argv),
        )

    @classmethod
    def from_argv(cls, executable: str, orig_argv: list[str], argv: list[str]) -> Invocation:
        """Split a raw interpreter command line.

        Args:
            executable: Interpreter path to use for the replacement.
            orig_argv: Full original command line (``sys.orig_argv``).
            argv: The program's view of its arguments (``sys.argv``).
        """
        runtime_flags, entry = _split_interpreter_args(orig_argv[1:])
        return cls(
            executable=executable,
            runtime_flags=tuple(runtime_flags),
            program_args=(executable, *entry, *argv[1:]),
        )


# Interpreter options whose value may be the following token.
_VALUE_OPTIONS = frozenset("WX")
_LONG_VALUE_OPTIONS = frozenset({"--check-hash-based-pycs"})


def _split_interpreter_args(args: list[str]) -> tuple[list[str], list[str]]:
    """Split interpreter arguments into (flags, program entry).

    *args* is ``sys.orig_argv`` without the interpreter path. Everything
    after the program entry is ignored. The entry is empty for an
    interactive interpreter.
    """
    flags: list[str] = []
    i = 0
    while i < len(args):
        token = args[i]
        if token == "-" or not token.startswith("-"):
            return flags, [token]
        if token == "--":
            return flags + [token], args[i + 1 : i + 2]
        if token.startswith("--"):
            flags.append(token)
            if token in _LONG_VALUE_OPTIONS and i + 1 < len(args):
                flags.append(args[i + 1])
                i += 1
            i += 1
            continue

        # short options may be grouped, e.g. ``-uB`` or ``-Wignore``
        for pos in range(1, len(token)):
            option = token[pos]
            rest = token[pos + 1 :]
            if option in "mc":
                if pos > 1:
                    flags.append(token[:pos])
                entry = [f"-{option}{rest}"] if rest else [f"-{option}", *args[i + 1 : i + 2]]
                return flags, entry
            if option in _VALUE_OPTIONS:
                flags.append(token)
                if not rest and i + 1 < len(args):
                    flags.append(args[i + 1])
                    i += 1
                break
        else:
            flags.append(token)
        i += 1
    return flags, []
