"""
Adapter registry for mapping document formats to format adapters.

The coordinator builds its adapters from this registry, so supporting a
new format only needs an adapter class and one register_adapter() call.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Type

from ..shared import DocumentFormat
from .base import FormatAdapter


# Global adapter registry
_ADAPTER_REGISTRY: Dict[DocumentFormat, Type[FormatAdapter]] = {}


def register_adapter(fmt: DocumentFormat, adapter_class: Type[FormatAdapter]) -> None:
    """
    Register an adapter class for a document format.

    Args:
        fmt: The format the adapter decodes (UNSUPPORTED cannot be registered)
        adapter_class: The adapter class to register
    """
    if fmt is DocumentFormat.UNSUPPORTED:
        raise ValueError("Cannot register an adapter for unsupported documents")
    _ADAPTER_REGISTRY[fmt] = adapter_class


def get_adapter(fmt: DocumentFormat, **kwargs: Any) -> Optional[FormatAdapter]:
    """
    Get an adapter instance for a format.

    Args:
        fmt: The document format
        **kwargs: Arguments to pass to the adapter constructor (e.g. events)

    Returns:
        Adapter instance, or None if no adapter is registered
    """
    adapter_class = _ADAPTER_REGISTRY.get(fmt)
    if adapter_class:
        return adapter_class(**kwargs)
    return None


def registered_formats() -> List[DocumentFormat]:
    return list(_ADAPTER_REGISTRY)


def list_adapters() -> List[Dict[str, Any]]:
    """
    List all registered adapters with their descriptions and availability.

    Returns:
        List of dicts with 'format', 'name', 'description' and 'available' keys
    """
    adapters = []
    for fmt, adapter_class in _ADAPTER_REGISTRY.items():
        description = adapter_class.__doc__ or "No description available"
        description = description.strip().split('\n')[0]
        adapters.append({
            'format': fmt.value,
            'name': adapter_class.__name__,
            'description': description,
            'available': adapter_class().available,
        })
    return sorted(adapters, key=lambda x: x['format'])


def unregister_adapter(fmt: DocumentFormat) -> None:
    """
    Unregister the adapter for a format.

    Args:
        fmt: The format to unregister
    """
    _ADAPTER_REGISTRY.pop(fmt, None)


__all__ = [
    "register_adapter",
    "get_adapter",
    "registered_formats",
    "list_adapters",
    "unregister_adapter",
]
