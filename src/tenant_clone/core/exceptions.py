"""
Custom exceptions used throughout the tenant_clone package.
"""


class TenantCloneException(Exception):
    """Exception class specific to the tenant_clone module.

    Args:
        msg (str): Optional message for the exception.
    """

    def __init__(self, msg=""):
        super().__init__(msg)
        self._msg = msg


class TenantClonePreconditionError(TenantCloneException):
    """A clone request was rejected before anything was modified."""

    def __init__(self, msg=""):
        super().__init__(msg)


class TenantCloneNoTablesError(TenantCloneException):
    """The source tenant has no tables to clone."""

    def __init__(self, prefix: str):
        super().__init__("No tables found")
        self.prefix = prefix


class TenantCloneConfigError(TenantCloneException):
    """The platform configuration could not be loaded or validated."""

    def __init__(self, msg=""):
        super().__init__(msg)
