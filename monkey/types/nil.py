from __future__ import annotations


class NullType:
    """The value of an `if` whose condition is false and has no else."""

    type_name = "NULL"
    _instance: NullType | None = None

    def __new__(cls):
        # Single shared instance; Null is compared by identity.
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self): return "Null"
    def __str__(self): return "null"
    def __bool__(self): return False

    def __eq__(self, other):
        return isinstance(other, NullType)

    def __hash__(self):
        return hash(NullType)


Null = NullType()
