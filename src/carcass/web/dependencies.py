"""FastAPI dependency injection for carcass services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from carcass.application import ResolveConfigurationCommand
from carcass.domain.services import LayoutCache


@lru_cache(maxsize=1)
def get_layout_cache() -> LayoutCache:
    """Get the process-wide segmentation cache."""
    return LayoutCache(maxsize=128)


def get_resolve_command(
    cache: Annotated[LayoutCache, Depends(get_layout_cache)],
) -> ResolveConfigurationCommand:
    """Dependency for ResolveConfigurationCommand with default pricing."""
    return ResolveConfigurationCommand(layout_cache=cache)


# Type aliases for cleaner endpoint signatures
LayoutCacheDep = Annotated[LayoutCache, Depends(get_layout_cache)]
ResolveCommandDep = Annotated[ResolveConfigurationCommand, Depends(get_resolve_command)]
