"""Exception hierarchy for bundle assembly and kernel resolution."""

from __future__ import annotations


class BootpackError(Exception):
    """Base exception for bootpack errors."""
    pass


class EnumerationError(BootpackError):
    """A source directory could not be walked."""

    def __init__(self, directory: str, reason: str | None = None):
        self.directory = directory
        self.reason = reason
        message = f'unable to read directory "{directory}"'
        if reason:
            message += f": {reason}"
        super().__init__(message)


class DescriptorError(BootpackError):
    """Base exception for runtime library descriptor problems."""
    pass


class DuplicateDescriptorError(DescriptorError):
    """More than one runtime library descriptor was found."""

    def __init__(self, first: str, second: str):
        self.first = first
        self.second = second
        super().__init__(
            f'found two copies of the runtime library at "{first}" and "{second}"'
        )


class InvalidDescriptorError(DescriptorError):
    """The descriptor is unreadable, not valid JSON, or lacks ``kernelVersion``."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f'unable to read runtime library config "{path}"')


class MissingDescriptorError(DescriptorError):
    """No runtime library descriptor exists in any source directory."""

    def __init__(self) -> None:
        super().__init__("directory does not contain runtime library sources")


class BundleNameCollisionError(BootpackError):
    """Two source files map to the same bundle name."""

    def __init__(self, name: str, first: str, second: str):
        self.name = name
        self.first = first
        self.second = second
        super().__init__(
            f'bundle name "{name}" is provided by both "{first}" and "{second}"'
        )


class BundleEntryTooLargeError(BootpackError):
    """A file name or file body does not fit the image's length fields."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f'cannot store "{name}" in the bundle: {reason}')


class InvalidKernelVersionError(BootpackError):
    """A kernel version string cannot be used as a cache file name."""

    def __init__(self, version: str):
        self.version = version
        super().__init__(f"invalid kernel version {version!r}")


class KernelFetchError(BootpackError):
    """Downloading a kernel build failed."""
    pass


class SettingsError(BootpackError):
    """Raised when config.yaml cannot be parsed or validated."""
    pass
