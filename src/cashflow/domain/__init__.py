"""Domain layer for cashflow application.

Services are imported from their own modules (``cashflow.domain.ledger``,
``cashflow.domain.receivables``, ``cashflow.domain.projection``) because they
depend on the database layer, which in turn imports the entities below.
"""

from cashflow.domain.status import classify_status, filter_by_visual_status

__all__ = ["classify_status", "filter_by_visual_status"]
