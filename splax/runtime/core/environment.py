"""
Lexical scopes for Splax programs.

All scopes created from one global scope live in a single ScopeArena. A scope
is a record holding its bindings and the index of its enclosing record, so the
chain is walked by index rather than through nested object ownership, and a
scope is released explicitly with `discard()` instead of being torn down
recursively. Release is strictly last-in-first-out: a scope cannot be
discarded while a live scope still points at it.

`Environment` is the handle evaluators work with. It pairs an arena with the
index of one record and exposes the three binding operations:

* `define` always writes to its own scope, which is how shadowing happens;
* `assign` overwrites the nearest existing binding anywhere up the chain;
* `get` reads the nearest binding.

`assign` and `get` raise UnboundVariable when no scope in the chain knows the
name. It is an ordinary exception, so the host decides whether to stop or to
report it and carry on.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from splax.exceptions import ErrorCode, SplaxError, UnboundVariable
from splax.lexer.core.classes import Token

logger = logging.getLogger(__name__)

GLOBAL_SCOPE = 0

# A literal value (float, str, bool, None) or a FunctionObject.
Value = Any

Name = Union[str, Token]


@dataclass
class ScopeRecord:
    parent: Optional[int]
    values: Dict[str, Value] = field(default_factory=dict)
    live_children: int = 0


class ScopeArena:
    """
    Owns the live scope records of one program run. A record is dropped as soon
    as its scope is discarded; indices keep counting up and are never reused, so
    a stale handle cannot land on a newer scope.
    """

    def __init__(self):
        self.records: Dict[int, ScopeRecord] = {GLOBAL_SCOPE: ScopeRecord(parent=None)}
        self.next_index = GLOBAL_SCOPE + 1

    def push(self, parent: int) -> int:
        parent_record = self.record(parent)
        parent_record.live_children += 1
        index = self.next_index
        self.next_index += 1
        self.records[index] = ScopeRecord(parent=parent)
        logger.debug(f"Created scope {index} enclosed by scope {parent}.")
        return index

    def release(self, index: int):
        if index == GLOBAL_SCOPE:
            raise SplaxError(ErrorCode.GLOBAL_SCOPE_DISCARD)

        record = self.record(index)
        if record.live_children:
            raise SplaxError(ErrorCode.SCOPE_STILL_ENCLOSING, index=index, children=record.live_children)

        del self.records[index]
        self.records[record.parent].live_children -= 1
        logger.debug(f"Discarded scope {index}.")

    def record(self, index: int) -> ScopeRecord:
        record = self.records.get(index)
        if record is None:
            raise SplaxError(ErrorCode.SCOPE_DISCARDED, index=index)
        return record

    def __len__(self):
        return len(self.records)

    def find(self, index: int, name: str) -> Optional[ScopeRecord]:
        """Returns the innermost record on the chain starting at `index` that binds `name`."""
        current = index
        while current is not None:
            record = self.record(current)
            if name in record.values:
                return record
            current = record.parent
        return None


def _split_name(name: Name):
    if isinstance(name, Token):
        return name.lexeme, name.line
    return name, None


class Environment:
    def __init__(self, enclosing: Optional["Environment"] = None):
        if enclosing is None:
            self.arena = ScopeArena()
            self.index = GLOBAL_SCOPE
        else:
            self.arena = enclosing.arena
            self.index = self.arena.push(enclosing.index)

    @property
    def enclosing(self) -> Optional["Environment"]:
        parent = self.arena.record(self.index).parent
        if parent is None:
            return None
        return Environment._handle(self.arena, parent)

    @property
    def depth(self) -> int:
        depth, parent = 0, self.arena.record(self.index).parent
        while parent is not None:
            depth += 1
            parent = self.arena.record(parent).parent
        return depth

    def define(self, name: Name, value: Value):
        lexeme, _ = _split_name(name)
        logger.debug(f"Defining '{lexeme}' = {value!r} in scope {self.index}.")
        self.arena.record(self.index).values[lexeme] = value

    def assign(self, name: Name, value: Value) -> Value:
        """Overwrites the nearest binding of `name` and returns the value it replaced."""
        lexeme, line = _split_name(name)
        logger.debug(f"Assigning '{lexeme}' = {value!r} from scope {self.index}.")

        record = self.arena.find(self.index, lexeme)
        if record is None:
            raise UnboundVariable(lexeme, line)

        previous = record.values[lexeme]
        record.values[lexeme] = value
        return previous

    def get(self, name: Name) -> Value:
        lexeme, line = _split_name(name)
        logger.debug(f"Looking up '{lexeme}' from scope {self.index}.")

        record = self.arena.find(self.index, lexeme)
        if record is None:
            raise UnboundVariable(lexeme, line)
        return copy.copy(record.values[lexeme])

    def contains(self, name: Name) -> bool:
        lexeme, _ = _split_name(name)
        return self.arena.find(self.index, lexeme) is not None

    def enclose(self) -> "Environment":
        """Creates a child scope; use it as a context manager to discard it on exit."""
        return Environment(self)

    def discard(self):
        self.arena.release(self.index)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.discard()
        return False

    def __repr__(self):
        return f"Environment(scope={self.index}, depth={self.depth})"

    @classmethod
    def _handle(cls, arena: ScopeArena, index: int) -> "Environment":
        env = cls.__new__(cls)
        env.arena = arena
        env.index = index
        return env
