"""Exception hierarchy shared by all icon_variants subpackages."""


class IconVariantsError(Exception):
    """Base class for every error raised by this package."""

    pass
