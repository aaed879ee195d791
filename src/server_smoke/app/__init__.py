"""
Composition root package.

Builds the harness components explicitly and wires them to a host; there is
no process-wide registry of component instances.
"""

from .container import SmokeTestContainer, create_smoke_test_container

__all__ = [
    "SmokeTestContainer",
    "create_smoke_test_container",
]
