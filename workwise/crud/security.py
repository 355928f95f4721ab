"""
CRUD operations for security monitoring records.
"""

from datetime import datetime, timedelta, timezone
from typing import List, Optional
from sqlalchemy.orm import Session
from workwise.models.security_event import SecurityDenial, SuspiciousIP
from workwise.schemas.security import DenialRecord


def create_denial(db: Session, denial: DenialRecord, is_critical: bool) -> SecurityDenial:
    row = SecurityDenial(**denial.model_dump(), is_critical=is_critical)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def get_denial(db: Session, denial_id: int) -> Optional[SecurityDenial]:
    return db.query(SecurityDenial).filter(SecurityDenial.id == denial_id).first()


def get_recent_denials(db: Session, limit: int = 100) -> List[SecurityDenial]:
    return (
        db.query(SecurityDenial)
        .order_by(SecurityDenial.timestamp.desc(), SecurityDenial.id.desc())
        .limit(limit)
        .all()
    )


def count_denials_from_ip(db: Session, ip_address: str, since: datetime) -> int:
    """Number of denials recorded for `ip_address` at or after `since`."""
    return (
        db.query(SecurityDenial)
        .filter(
            SecurityDenial.ip_address == ip_address,
            SecurityDenial.timestamp >= since,
        )
        .count()
    )


def count_denials_since(db: Session, since: datetime, critical_only: bool = False) -> int:
    query = db.query(SecurityDenial).filter(SecurityDenial.timestamp >= since)
    if critical_only:
        query = query.filter(SecurityDenial.is_critical.is_(True))
    return query.count()


def get_active_flag(db: Session, ip_address: str, since: datetime) -> Optional[SuspiciousIP]:
    """Most recent flag for the IP raised at or after `since`."""
    return (
        db.query(SuspiciousIP)
        .filter(SuspiciousIP.ip_address == ip_address, SuspiciousIP.flagged_at >= since)
        .order_by(SuspiciousIP.flagged_at.desc())
        .first()
    )


def flag_ip(
    db: Session,
    ip_address: str,
    denial_count: int,
    action_required: str,
    window_minutes: int,
) -> SuspiciousIP:
    """
    Record (or refresh) a suspicious-IP flag.

    A flag raised inside the current window is updated in place instead of
    creating one row per denial past the threshold.
    """
    now = datetime.now(timezone.utc)
    flag = get_active_flag(db, ip_address, now - timedelta(minutes=window_minutes))

    if flag is None:
        flag = SuspiciousIP(ip_address=ip_address, action_required=action_required)
        db.add(flag)

    flag.denial_count = denial_count
    flag.flagged_at = now

    db.commit()
    db.refresh(flag)
    return flag


def get_suspicious_ips(db: Session, limit: int = 100) -> List[SuspiciousIP]:
    return db.query(SuspiciousIP).order_by(SuspiciousIP.flagged_at.desc()).limit(limit).all()


def count_suspicious_ips(db: Session) -> int:
    return db.query(SuspiciousIP).count()
