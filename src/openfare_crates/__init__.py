"""openfare-crates package.

Resolves crates.io packages and local Cargo projects into their dependency
graph and attaches each package's ``OpenFare.lock`` funding declaration.
"""

__version__ = "0.1.1"

__all__ = [
    "__version__",
    "core",
    "extension",
]
