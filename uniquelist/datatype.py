class _null:
    """
    Null class type, an explicit null element.
    Treated exactly like `None` by the uniqueness checks.
    """

    def __repr__(self):
        return "Null"

    def __eq__(self, other):
        return type(self) is type(other)


class Empty:
    """
    Marker for "no value", used where `None` is itself a valid result
    """

    pass


Null = _null()
