"""Lexical scopes for the evaluator.

A scope is a local name -> Object mapping plus an optional parent. Parents are snapshots: new_child copies the
current state of its creator, so a child never observes bindings its parent gains afterwards. This is what gives
closures point-in-time capture:

    let x = 1;
    let f = fn() { x };   // f captures a snapshot holding x = 1
    let x = 2;
    f();                  // 1

Writes never go through to an enclosing scope: set always binds locally.
"""


class Environment:
    """Scope chain node. store holds local bindings; parent is None for the root scope."""

    def __init__(self, store=None, parent=None):
        self.store = {} if store is None else store
        self.parent = parent

    def copy(self):
        """Snapshot of this scope. Parents are already snapshots nobody writes to, so they are shared."""
        return Environment(dict(self.store), self.parent)

    def new_child(self):
        """Empty scope whose parent is a snapshot of this scope."""
        return Environment(parent=self.copy())

    def get(self, name):
        """Value bound to name in this scope or the nearest enclosing one, or None if name is unbound."""
        if name in self.store:
            return self.store[name]
        if self.parent is not None:
            return self.parent.get(name)
        return None

    def set(self, name, value):
        """Binds name to value in this scope and returns value."""
        self.store[name] = value
        return value

    def __repr__(self):
        return f"Environment(store={self.store!r}, parent={self.parent!r})"
