"""Application ports - interfaces for external adapters."""

from catalogacl.application.ports.access_checker import AccessChecker
from catalogacl.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "AccessChecker",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
