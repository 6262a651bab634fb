"""Splitting Windows command lines and finding the program they start."""

from __future__ import annotations

_WHITESPACE = " \t"


def remove_quotes(binary_path: str) -> str:
    """Strip surrounding double quotes, if the text is quoted on both ends."""
    if binary_path.startswith('"') and binary_path.endswith('"'):
        return binary_path.lstrip('"').rstrip('"')
    return binary_path


def _split_windows(command: str) -> list[str]:
    args: list[str] = []
    current: list[str] = []
    in_arg = False
    in_quotes = False
    i = 0
    n = len(command)
    while i < n:
        ch = command[i]
        if ch == "\\":
            start = i
            while i < n and command[i] == "\\":
                i += 1
            count = i - start
            in_arg = True
            if i < n and command[i] == '"':
                current.append("\\" * (count // 2))
                if count % 2:
                    current.append('"')
                    i += 1
            else:
                current.append("\\" * count)
            continue
        if ch == '"':
            in_arg = True
            if in_quotes and i + 1 < n and command[i + 1] == '"':
                current.append('"')
                i += 2
                continue
            in_quotes = not in_quotes
            i += 1
            continue
        if ch in _WHITESPACE and not in_quotes:
            if in_arg:
                args.append("".join(current))
                current = []
                in_arg = False
            i += 1
            continue
        current.append(ch)
        in_arg = True
        i += 1
    if in_arg:
        args.append("".join(current))
    return args


def split_command(command_str: str) -> list[str]:
    """Split a registry command line into arguments.

    A command that does not start with a quote is quoted as a whole first,
    so that unquoted paths with spaces stay one argument.
    """
    if not command_str.startswith('"'):
        command_str = f'"{command_str}"'
    return _split_windows(command_str)


def guess_executable_path(command_parts) -> str:
    """Return the last argument that is neither a placeholder nor an option.

    Returns ``"unknown"`` when there is none.
    """
    candidates = [
        part
        for part in map(remove_quotes, command_parts)
        if not part.startswith("%") and not part.startswith("-")
    ]
    return candidates[-1] if candidates else "unknown"