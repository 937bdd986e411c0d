"""Version range predicates used by dependency declarations."""

from .models import (  # noqa: F401
    UNSATISFIABLE,
    BaseVersionRange,
    BoundedVersionRange,
    ExactVersionRange,
    IntersectionVersionRange,
    MaximumVersionRange,
    MinimumVersionRange,
    UnionVersionRange,
    UnsatisfiableVersionRange,
    VersionRange,
)
from .parser import parse_version_range  # noqa: F401
