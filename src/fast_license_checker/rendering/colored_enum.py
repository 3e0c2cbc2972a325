# flc:header:start
#
#   project      : Fast License Checker
#   file         : colored_enum.py
#   file_relpath : src/fast_license_checker/rendering/colored_enum.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Color-aware string enums for human-facing rendering.

Key types:
    - `Colorizer`: Protocol describing any callable compatible with
      `yachalk.ChalkBuilder.__call__`.
    - `ColoredStrEnum`: `str, Enum` whose ``.value`` is a machine-readable
      key, with a human ``.label`` and a colorizer exposed via ``.color``.

Example:
    ```python
    from yachalk import chalk

    class Verdict(ColoredStrEnum):
        PASS = ("pass", "passed", chalk.green)
        FAIL = ("fail", "failed", chalk.red_bright)

    print(Verdict.PASS.value)          # 'pass'
    print(Verdict.PASS.label)          # 'passed'
    print(Verdict.PASS.color("ok"))    # green "ok"
    ```
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol


class Colorizer(Protocol):
    """Callable that decorates a string for display.

    Compatible with `yachalk.ChalkBuilder.__call__`, which accepts a variadic
    list of arguments and a `sep` keyword.
    """

    def __call__(self, *args: object, sep: str = " ") -> str:
        """Colorize and concatenate provided arguments into a display string.

        Args:
            *args (object): One or more objects to render, typically strings.
            sep (str): Separator between arguments when multiple values are provided.

        Returns:
            str: The colorized and concatenated output string.
        """
        ...


class ColoredStrEnum(str, Enum):
    """Enum whose *value* is a string key and that carries a label and a colorizer.

    The member remains a `str` (hashing, equality and JSON serialization use the
    key), while the label and colorizer are stored separately on the instance.
    """

    _value_: str
    _label: str
    _color: Colorizer

    def __new__(cls, key: str, label: str, color: Colorizer) -> ColoredStrEnum:
        """Construct a colored enum member.

        Args:
            key (str): Machine-readable value (stored in `_value_`).
            label (str): Human-readable label.
            color (Colorizer): A callable used to colorize text for display.

        Returns:
            ColoredStrEnum: The newly constructed enum member.
        """
        obj: ColoredStrEnum = str.__new__(cls, key)
        obj._value_ = key
        obj._label = label
        obj._color = color
        return obj

    @property
    def value(self) -> str:
        """Return the machine-readable key of the member."""
        return self._value_

    @property
    def label(self) -> str:
        """Return the human-readable label of the member."""
        return self._label

    @property
    def color(self) -> Colorizer:
        """Return the colorizer associated with this member."""
        return self._color

    def render(self, *, enable_color: bool = True) -> str:
        """Return the label, colorized when ``enable_color`` is set.

        Args:
            enable_color (bool): Whether to apply the colorizer.

        Returns:
            str: The (optionally colored) label.
        """
        return self._color(self._label) if enable_color else self._label
