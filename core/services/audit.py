import logging
from typing import Any, Dict, Iterable, Optional

from django.contrib.auth import get_user_model
from django.db import DatabaseError

from core.models import AuditEvent

User = get_user_model()
logger = logging.getLogger(__name__)


def client_ip(request) -> Optional[str]:
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR')
    if forwarded:
        return forwarded.split(',')[0].strip() or None
    return request.META.get('REMOTE_ADDR') or None


def log_action(*, user, action: str, entity_type: str, entity_id: Any = None,
               detail: Optional[Dict[str, Any]] = None, ip: Optional[str] = None) -> Optional[AuditEvent]:
    try:
        return AuditEvent.objects.create(
            user=user if isinstance(user, User) and user.pk else None,
            action=action,
            entity_type=entity_type,
            entity_id=str(entity_id) if entity_id is not None else None,
            detail=detail or {},
            ip=ip,
        )
    except DatabaseError:
        logger.warning("audit write failed for %s %s:%s", action, entity_type, entity_id, exc_info=True)
        return None


def audit(request, action: str, entity_type: str, entity_id: Any = None,
          fields: Iterable[str] = (), **extra: Any) -> Optional[AuditEvent]:
    """Record a mutation made through ``request``; ``fields`` names what changed."""
    detail: Dict[str, Any] = dict(extra)
    if fields:
        detail['fields'] = sorted(fields)
    return log_action(
        user=getattr(request, 'user', None),
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        detail=detail,
        ip=client_ip(request),
    )
