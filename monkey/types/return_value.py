from monkey.types.values import Value


class ReturnValue:
    """Marks a value produced by a `return` statement.

    Blocks stop at the first ReturnValue and hand it up unchanged; only the
    function-call boundary and the top-level program unwrap it.
    """

    __slots__ = ("value",)

    def __init__(self, value: Value):
        self.value = value

    def __repr__(self):
        return f"ReturnValue({self.value!r})"
