class UnknownCRSError(ValueError):
    """A collection has no coordinate reference system, or one pyproj cannot resolve."""


class CRSMismatchError(ValueError):
    """Two collections were overlaid without first sharing one CRS."""


class MissingAttributeError(KeyError):
    """A column needed for filtering or grouping is absent from a collection."""

    def __init__(self, name, missing):
        self.name = name
        self.missing = list(missing)
        super().__init__(f"{name} is missing required attribute(s): {', '.join(self.missing)}")

    def __str__(self):
        return self.args[0]


class EmptyIntersectionWarning(UserWarning):
    """An overlay produced no intersecting pairs at all."""
