"""Factories for the organisational hierarchy: companies, areas and teams."""

from uuid import uuid4

from polyfactory import Use

from src.lamyda.models import Area, Company, Team, TeamMember, TeamRole
from tests.factories.base import BaseFactory, short_token, utc_now


class CompanyFactory(BaseFactory):
    __model__ = Company

    id = Use(uuid4)
    name = Use(lambda: f"Test Company {short_token()}")
    is_active = True
    created_at = Use(utc_now)

    @classmethod
    def inactive(cls, **kwargs):
        return cls.build(is_active=False, **kwargs)


class AreaFactory(BaseFactory):
    """Build with ``company_id=...``."""

    __model__ = Area

    id = Use(uuid4)
    name = Use(lambda: f"Area {short_token()}")
    description = None
    manager_id = None
    is_active = True
    created_by = None
    updated_by = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)


class TeamFactory(BaseFactory):
    """Build with ``area_id=...``."""

    __model__ = Team

    id = Use(uuid4)
    name = Use(lambda: f"Team {short_token()}")
    description = None
    team_leader_id = None
    is_active = True
    created_by = None
    updated_by = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)


class TeamMemberFactory(BaseFactory):
    """Build with ``team_id=...``."""

    __model__ = TeamMember

    id = Use(uuid4)
    user_id = Use(uuid4)
    role = TeamRole.MEMBER.value
    is_active = True
    added_by = None
    created_at = Use(utc_now)
