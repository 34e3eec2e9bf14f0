"""Process and document factories."""

from uuid import uuid4

from polyfactory import Use

from src.lamyda.models import AssetKind, Document, Process
from tests.factories.base import BaseFactory, short_token, utc_now


class ProcessFactory(BaseFactory):
    """Build with ``company_id=...``; area and team are unset by default."""

    __model__ = Process

    id = Use(uuid4)
    name = Use(lambda: f"Process {short_token()}")
    description = None
    type = "operational"
    status = True
    area_id = None
    team_id = None
    person_in_charge = None
    document_by_user = None
    markmap_by_user = None
    video_url = None
    json_by_ai = None
    steps_by_ai = None
    document_by_ai = None
    markmap_by_ai = None
    created_by = None
    updated_by = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)

    @classmethod
    def archived(cls, **kwargs):
        return cls.build(status=False, **kwargs)


class DocumentFactory(BaseFactory):
    """Build with ``process_id=...``."""

    __model__ = Document

    id = Use(uuid4)
    kind = AssetKind.DOCUMENT.value
    file_name = "manual.pdf"
    file_type = "application/pdf"
    file_size = 4
    file_hash = "0" * 64
    storage_path = Use(lambda: f"documents/{short_token()}.pdf")
    file_url = Use(lambda: f"https://storage.test/public/documents/{short_token()}.pdf")
    created_by = None
    created_at = Use(utc_now)
