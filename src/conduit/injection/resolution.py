# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit
"""
Tracking of the tokens currently being resolved, for cycle detection.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from conduit.injection.errors import CircularDependencyError, token_name


class ResolutionStack:
    """Ordered set of tokens under construction on the current call chain."""

    def __init__(self) -> None:
        # dict keys keep insertion order and give O(1) membership
        self._tokens: dict[Any, None] = {}

    def __contains__(self, token: Any) -> bool:
        return token in self._tokens

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._tokens)

    def check(self, token: Any) -> None:
        """Raise if ``token`` is already being resolved."""
        if token in self._tokens:
            raise CircularDependencyError(token, list(self._tokens))

    @contextmanager
    def push(self, token: Any) -> Iterator[None]:
        """Hold ``token`` on the stack for the duration of the block."""
        self.check(token)
        self._tokens[token] = None
        try:
            yield
        finally:
            self._tokens.pop(token, None)

    def chain(self) -> str:
        return " -> ".join(token_name(t) for t in self._tokens)
