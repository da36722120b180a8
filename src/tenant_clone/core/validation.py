"""Shared Pydantic configuration for tenant_clone.

``PlatformConfig`` uses the strict variant so that unknown keys in a config
file are reported instead of silently ignored. ``validate_call`` entry points
such as ``mirror_assets`` use the lenient one, which coerces plain strings to
``Path``.

Example:
    >>> from pydantic import validate_call
    >>> from tenant_clone.core.validation import VALIDATION_CONFIG
    >>>
    >>> @validate_call(config=VALIDATION_CONFIG)
    ... def upload_root(base: Path) -> Path:
    ...     return base
"""

from pydantic import ConfigDict

# Defaults are validated too, so field validators also run on default values.
VALIDATION_CONFIG = ConfigDict(
    arbitrary_types_allowed=True,
    validate_default=True,
    use_enum_values=True,
)

# Same as VALIDATION_CONFIG but rejects unknown fields.
STRICT_VALIDATION_CONFIG = ConfigDict(
    arbitrary_types_allowed=True,
    validate_default=True,
    use_enum_values=True,
    extra="forbid",
)

__all__ = [
    "VALIDATION_CONFIG",
    "STRICT_VALIDATION_CONFIG",
]
