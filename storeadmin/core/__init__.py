"""
Store Admin Core
================

Configuration, logging, remote service clients and dashboard state shared by the modules.
"""

from .config import Config
from .logging_service import LoggingService
from .services import ServiceError, ProductServiceClient, OrderServiceClient
from .state import DashboardState, StateStore, InvalidTransitionError

__all__ = [
    'Config', 'LoggingService',
    'ServiceError', 'ProductServiceClient', 'OrderServiceClient',
    'DashboardState', 'StateStore', 'InvalidTransitionError',
]
