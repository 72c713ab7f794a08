from app.services.scan.scan_session_store import (
    STATUS_COMPLETED,
    STATUS_WAITING,
    ScanSession,
    ScanSessionStore,
    scan_sessions,
)

__all__ = [
    "STATUS_COMPLETED",
    "STATUS_WAITING",
    "ScanSession",
    "ScanSessionStore",
    "scan_sessions",
]
