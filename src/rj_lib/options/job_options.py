# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from dataclasses import dataclass
from enum import Enum


class FlagArity(Enum):
    """
    Number of command line tokens consumed by a qsub flag and the way
    repeated occurrences of the flag are combined.
    """

    # flag without a value; repeating it has no effect
    NONE = 0
    # flag with one value; a later occurrence replaces the earlier one
    SINGLE = 1
    # flag with one value; repeated occurrences are joined by commas
    MULTI = 2
    # flag with two values joined by a space (e.g. `-pe smp 4`)
    PAIR = 3

    def __str__(self) -> str:
        return self.name.lower()

    def nargs(self) -> int:
        """Return the number of value tokens following the flag."""
        return {
            FlagArity.NONE: 0,
            FlagArity.SINGLE: 1,
            FlagArity.MULTI: 1,
            FlagArity.PAIR: 2,
        }[self]


@dataclass
class OptionEntry:
    """A single qsub flag together with its (possibly joined) value."""

    flag: str
    arity: FlagArity
    value: str = ""

    def toArgs(self) -> list[str]:
        """
        Convert the entry back into qsub command line tokens.

        Returns:
            list[str]: The flag followed by its value token(s).
        """
        match self.arity:
            case FlagArity.NONE:
                return [self.flag]
            case FlagArity.PAIR:
                return [self.flag, *self.value.split(" ", 1)]
            case _:
                return [self.flag, self.value]


class JobOptions:
    """
    Ordered collection of qsub options.

    Entries are stored in an append-only list in the order in which the flags
    were first seen; a dictionary maps every flag to its position in the list.
    """

    def __init__(self):
        self._entries: list[OptionEntry] = []
        self._index: dict[str, int] = {}

    def add(self, flag: str, arity: FlagArity, value: str = "") -> None:
        """
        Add an occurrence of a flag.

        Args:
            flag (str): The qsub flag including the leading dash.
            arity (FlagArity): How the flag consumes and combines values.
            value (str): Value of the flag. Ignored for flags without a value.
        """
        if arity == FlagArity.NONE:
            value = ""

        if (position := self._index.get(flag)) is None:
            self._index[flag] = len(self._entries)
            self._entries.append(OptionEntry(flag, arity, value))
            return

        entry = self._entries[position]
        if arity == FlagArity.MULTI and entry.value:
            entry.value = f"{entry.value},{value}"
        else:
            entry.value = value

    def get(self, flag: str) -> str | None:
        """
        Return the value of a flag or None if the flag has not been set.
        Flags without a value return an empty string.
        """
        if (position := self._index.get(flag)) is None:
            return None
        return self._entries[position].value

    def has(self, flag: str) -> bool:
        """Check whether the flag has been set."""
        return flag in self._index

    def entries(self) -> list[OptionEntry]:
        """Return the entries in the order in which the flags were first seen."""
        return list(self._entries)

    def toArgs(self) -> list[str]:
        """
        Convert all entries into qsub command line tokens.

        Returns:
            list[str]: Tokens in insertion order.
        """
        args = []
        for entry in self._entries:
            args.extend(entry.toArgs())
        return args

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"JobOptions({self.toArgs()})"
