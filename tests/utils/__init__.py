"""Test utilities package."""

from tests.utils.cleanup import cleanup_company_cascade

__all__ = ["cleanup_company_cascade"]
