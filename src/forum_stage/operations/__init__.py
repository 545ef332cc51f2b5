"""Command handlers and the dispatcher that routes to them."""

from .base import Operation, OperationContext
from .bootstrap import BootstrapState, SiteBootstrap
from .dispatch import OPERATIONS, UserOperation, dispatch, perform

__all__ = [
    "OPERATIONS",
    "BootstrapState",
    "Operation",
    "OperationContext",
    "SiteBootstrap",
    "UserOperation",
    "dispatch",
    "perform",
]
