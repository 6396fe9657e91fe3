"""
Path Data Formatting for VecSVG

Converts path command lists into SVG path data strings.
"""

from typing import Iterable, Sequence, Union

from ..core.elements import PathCommand


def format_number(value: float, decimals: int = 3) -> str:
    """
    Format a number for SVG output.

    Integral values are written without a decimal point, everything else
    is rounded to the given number of decimals with trailing zeros removed.
    """
    value = float(value)
    if value.is_integer():
        return str(int(value))
    text = f"{value:.{decimals}f}".rstrip('0').rstrip('.')
    if text in ('-0', ''):
        return '0'
    return text


def format_path(commands: Iterable[Union[PathCommand, Sequence]], decimals: int = 3) -> str:
    """
    Build the d attribute for a list of path commands.

    Every token is followed by a single space:
    [["M", 0, 0], ["L", 10.5, 0]] -> "M 0 0 L 10.5 0 "
    """
    parts = []
    for command in commands:
        if not isinstance(command, PathCommand):
            command = PathCommand.from_sequence(command)
        parts.append(command.letter + ' ')
        for arg in command.args:
            parts.append(format_number(arg, decimals) + ' ')
    return ''.join(parts)
