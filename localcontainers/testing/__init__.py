"""Test-scoping helpers.

Example:
    class Postgres(ContainerKey):
        spec = ContainerSpec(ContainerConfiguration(image="postgres:16", ...))

    async with container_scope(Postgres) as context:
        port = context[Postgres].mapped_port(5432)
"""

from .context import ContainerTestContext
from .lifecycle import provision, release
from .scope import container_scope
from .shared import SharedContainerManager, shared_container_scope, shared_containers

__all__ = [
    "ContainerTestContext",
    "SharedContainerManager",
    "container_scope",
    "provision",
    "release",
    "shared_container_scope",
    "shared_containers",
]
