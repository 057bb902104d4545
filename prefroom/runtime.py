"""Runtime support imported by generated Python components."""


class UninitializedStateError(RuntimeError):
    """Raised when a component singleton is accessed before ``init()``."""

    pass
