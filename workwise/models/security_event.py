"""
Security monitoring models.

SecurityDenial mirrors one Firestore permission-denied audit log entry.
SuspiciousIP records an IP that crossed the denial threshold.
"""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, func
from workwise.core.database import Base


class SecurityDenial(Base):
    __tablename__ = "firestore_denials"

    id = Column(Integer, primary_key=True, index=True)
    timestamp = Column(DateTime(timezone=True), nullable=False, index=True)

    user_id = Column(String, nullable=False, default="anonymous")
    user_email = Column(String, nullable=True)
    ip_address = Column(String, nullable=True, index=True)
    user_agent = Column(String, nullable=True)

    method_name = Column(String, nullable=True)
    resource_path = Column(Text, nullable=True)
    error_code = Column(Integer, nullable=True)
    error_message = Column(Text, nullable=True)
    severity = Column(String, nullable=True)
    request_type = Column(String, nullable=False, default="unknown")

    is_critical = Column(Boolean, default=False, nullable=False, index=True)
    received_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<SecurityDenial(id={self.id}, ip='{self.ip_address}', type='{self.request_type}')>"


class SuspiciousIP(Base):
    __tablename__ = "suspicious_ips"

    id = Column(Integer, primary_key=True, index=True)
    ip_address = Column(String, nullable=False, index=True)
    denial_count = Column(Integer, nullable=False)
    flagged_at = Column(DateTime(timezone=True), nullable=False, index=True)
    action_required = Column(String, nullable=False)

    def __repr__(self):
        return f"<SuspiciousIP(ip='{self.ip_address}', denials={self.denial_count})>"
