"""Database bootstrapping utilities."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.packages.membership.core.config import get_settings
from app.packages.membership.core.enums import WorkgroupStatusEnum
from app.packages.membership.core.timezone import now as tz_now, to_utc
from app.packages.membership.db import session as db_session
from app.packages.membership.models.base import Base
from app.packages.membership.models.workgroup import Workgroup

logger = logging.getLogger(__name__)


def init_db() -> None:
    """Create all database tables if they do not exist and seed baseline data."""
    Base.metadata.create_all(bind=db_session.engine)

    session = db_session.SessionLocal()
    try:
        _seed_root_workgroup(session)
        session.commit()
    except Exception:
        session.rollback()
        logger.exception("Failed to seed default data during database initialization")
        raise
    finally:
        session.close()


def _seed_root_workgroup(db: Session) -> None:
    """Ensure the hierarchy has a top-level workgroup when the table is empty."""
    if db.query(Workgroup.id).first() is not None:
        return
    name = get_settings().root_workgroup_name
    db.add(
        Workgroup(
            name=name,
            status=WorkgroupStatusEnum.ACTIVE.value,
            creation_date=to_utc(tz_now()),
            parent_id=None,
        )
    )
    logger.info("Seeded root workgroup %r", name)
