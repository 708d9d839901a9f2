# tests/__init__.py
"""
Expose common test utilities so tests can import directly:
    from tests import make_loan_parameters, make_request
"""

from .utils import make_loan_parameters, make_record, make_request

__all__ = ["make_loan_parameters", "make_record", "make_request"]
