"""Bundle identity and dependency model.

This package provides:
- identifier.py: canonical bundle identifiers and their grammar
- version_order.py: ordering of version numbers and version qualifiers
- dependency.py, dependency_list.py, dependency_information.py: the immutable
  dependency declaration model
- errors.py: the error taxonomy shared with the text codec
"""

from .errors import (  # noqa: F401
    AmbiguousVersionError,
    FormatError,
    NestDepsError,
    StructuralError,
    UnterminatedValueError,
)
from .version_order import (  # noqa: F401
    compare_version_numbers,
    compare_version_qualifiers,
    get_version_number_component_count,
    next_version_number_in_natural_order,
)
from .identifier import Identifier  # noqa: F401
from .dependency import Dependency, DependencyBuilder  # noqa: F401
from .dependency_list import DependencyList  # noqa: F401
from .dependency_information import DependencyInformation  # noqa: F401

__all__ = [
    "AmbiguousVersionError",
    "FormatError",
    "NestDepsError",
    "StructuralError",
    "UnterminatedValueError",
    "compare_version_numbers",
    "compare_version_qualifiers",
    "get_version_number_component_count",
    "next_version_number_in_natural_order",
    "Identifier",
    "Dependency",
    "DependencyBuilder",
    "DependencyList",
    "DependencyInformation",
]
