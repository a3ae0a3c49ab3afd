class UniqueListError(Exception):
    """
    Base class of every error raised by a unique list
    """

    pass


class DuplicateValueError(UniqueListError, ValueError):
    """
    A value written to a live list already exists in the list
    """

    def __init__(self, value):
        self.value = value
        super().__init__("The list already contains [{}].".format(value))


class DuplicateValuesError(UniqueListError, ValueError):
    """
    The source a list is being constructed from holds the same value twice
    """

    def __init__(self, value):
        self.value = value
        super().__init__(
            "The constructing list contains multiple instances of [{}].".format(value)
        )


class UnsupportedOperationError(UniqueListError, TypeError):
    """
    The operation can't be performed on this list at all,
    e.g. growing a fixed-length list or filling a range
    """

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)
