"""ORM Models — SQLAlchemy declarative models for accounts and contact links.

Invariants:
    - All models inherit from Base (db/base.py)
    - ContactLink rows are scoped by owner_id for every read and write

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all
      or alembic autogenerate runs
"""

from linkbook.models.account import Account  # noqa: F401
from linkbook.models.contact_link import ContactLink  # noqa: F401
