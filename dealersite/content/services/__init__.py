from .resource_service import ResourceService

__all__ = ['ResourceService']
