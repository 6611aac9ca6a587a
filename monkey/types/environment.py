"""Runtime environment for Monkey.

The Environment stores bindings of names to evaluated values and supports
nested scopes via an `outer` link. Lookups walk outward through the chain;
definitions always land in the current frame, so a child scope never writes
into its parent.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional, Iterator, TYPE_CHECKING

from monkey.errors import IdentifierNotFound

if TYPE_CHECKING:
    from monkey.types.values import Value


class Environment:
    """Hierarchical mapping from names to Monkey values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[str, Value] = {}
        self.outer: Environment | None = outer

    def extend(self) -> Environment:
        """Return a new child frame whose outer is this environment."""
        return Environment(outer=self)

    def define(self, name: str, value: Value) -> None:
        """Bind `name` to `value` in this frame, shadowing any outer binding."""
        self.vars[name] = value

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest environment in the chain that binds `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.outer
        return None

    def lookup(self, name: str) -> Value:
        """Look up the value bound to `name`.

        Raises IdentifierNotFound if no frame in the chain binds it.
        """
        env = self.find(name)
        if env is None:
            raise IdentifierNotFound(name)
        return env.vars[name]

    def __contains__(self, name: str) -> bool:
        return self.find(name) is not None

    def __iter__(self) -> Iterator[str]:
        """Iterate over visible names, innermost binding first."""
        seen: set[str] = set()
        env: Optional[Environment] = self
        while env is not None:
            for name in env.vars:
                if name not in seen:
                    seen.add(name)
                    yield name
            env = env.outer

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Detailed chain representation for debugging purposes."""
        chain = []
        env: Optional[Environment] = self
        while env is not None:
            with StringIO() as frame:
                env._write_vars(frame)
                chain.append(frame.getvalue())
            env = env.outer
        return "<Environment chain: " + " -> ".join(chain) + ">"
