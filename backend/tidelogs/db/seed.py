# tidelogs/db/seed.py
"""
Demo data for local dashboards.

Enabled with SEED_SAMPLE_DATA=true; only runs against an empty `logs` table so
restarts never duplicate rows.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tidelogs.db.models import LogEntry, utcnow

logger = logging.getLogger(__name__)

# (service, level, message, metadata)
SAMPLE_LOGS: List[Tuple[str, str, str, Dict[str, Any]]] = [
    ("auth-service", "INFO", "User login successful", {"user_id": "123", "ip": "192.168.1.1"}),
    ("auth-service", "ERROR", "Failed login attempt", {"user_id": "456", "ip": "192.168.1.2", "error": "invalid_password"}),
    ("api-gateway", "INFO", "Request processed", {"method": "GET", "path": "/users", "status": 200, "duration_ms": 45}),
    ("payment-service", "WARN", "High transaction volume detected", {"transactions_per_minute": 150, "threshold": 100}),
    ("database", "ERROR", "Connection timeout", {"timeout_ms": 5000, "retries": 3}),
    ("auth-service", "INFO", "User logout", {"user_id": "123", "session_duration_minutes": 45}),
    ("api-gateway", "ERROR", "Rate limit exceeded", {"ip": "192.168.1.3", "requests_per_minute": 120, "limit": 100}),
    ("notification-service", "INFO", "Email sent successfully", {"recipient": "user@example.com", "template": "welcome"}),
    ("payment-service", "INFO", "Payment processed", {"amount": 99.99, "currency": "USD", "payment_id": "pay_123"}),
    ("database", "WARN", "Slow query detected", {"query_time_ms": 2500, "table": "users"}),
]


async def seed_sample_logs(session: AsyncSession) -> int:
    """Insert SAMPLE_LOGS if the table is empty. Returns the number of rows added."""
    existing = int((await session.execute(select(func.count()).select_from(LogEntry))).scalar() or 0)
    if existing:
        logger.info("Skipping sample data; %d log entries already stored", existing)
        return 0

    now = utcnow()
    session.add_all(
        [
            LogEntry(
                timestamp=now,
                service=service,
                level=level,
                message=message,
                metadata_=metadata,
                created_at=now,
            )
            for service, level, message, metadata in SAMPLE_LOGS
        ]
    )
    await session.commit()

    logger.info("Inserted %d sample log entries", len(SAMPLE_LOGS))
    return len(SAMPLE_LOGS)
