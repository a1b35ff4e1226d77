"""Variable environments for the evaluator."""


class Scope:
    """Chained name -> value mapping. Lookup walks outward through parents, assignment only touches this scope.

    A function call runs in scope.child(). The child holds a reference to the caller's scope rather than a copy of
    it: nothing run inside the call can write to an outer scope and function values do not capture scopes, so the
    callee sees exactly the caller's bindings at call time and nothing outlives the call.
    """

    def __init__(self, parent=None):
        self.store = {}
        self.parent = parent

    def get(self, name):
        """Returns the innermost value bound to name, or None if it is unbound."""
        scope = self
        while scope is not None:
            if name in scope.store:
                return scope.store[name]
            scope = scope.parent
        return None

    def set(self, name, value):
        """Binds name to value in this scope, shadowing any outer binding."""
        self.store[name] = value

    def child(self):
        return Scope(parent=self)

    def __contains__(self, name):
        return self.get(name) is not None

    def __repr__(self):
        return f"Scope({self.store!r}, parent={self.parent!r})"
