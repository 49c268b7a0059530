from .base import DatabaseClient
from .client import ModelClient
from .projection import to_camel

__all__ = ['DatabaseClient', 'ModelClient', 'to_camel']
