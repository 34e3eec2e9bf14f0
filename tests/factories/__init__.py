"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import CompanyFactory, ProcessFactory, ...
"""

from tests.factories.base import BaseFactory, short_token, utc_now
from tests.factories.company import (
    AreaFactory,
    CompanyFactory,
    TeamFactory,
    TeamMemberFactory,
)
from tests.factories.process import DocumentFactory, ProcessFactory

__all__ = [
    # Base
    "BaseFactory",
    "short_token",
    "utc_now",
    # Organisation
    "AreaFactory",
    "CompanyFactory",
    "TeamFactory",
    "TeamMemberFactory",
    # Processes
    "DocumentFactory",
    "ProcessFactory",
]
