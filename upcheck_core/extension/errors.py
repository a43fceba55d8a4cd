"""Extension-specific error types."""


class ExtensionError(Exception):
    """Base type for extension-related failures."""


class ExtensionLoadError(ExtensionError):
    """Raised when an extension entrypoint cannot be imported or instantiated."""


class ExtensionNotFoundError(ExtensionError):
    """Raised when no attached extension provides a requested method."""
