from flask import has_request_context, request
from loguru import logger


def log_event(action: str, user_id=None, entity=None, entity_id=None, metadata=None):
    """Structured audit record; goes to the same sinks as the app log."""
    ip = None
    if has_request_context():
        ip = request.headers.get("X-Forwarded-For", request.remote_addr)

    logger.bind(
        audit=True,
        action=action,
        user_id=user_id,
        entity=entity,
        entity_id=str(entity_id) if entity_id is not None else None,
        ip=ip,
        metadata=metadata or {},
    ).info(
        "audit: {} user_id={} entity={}:{} meta={}",
        action, user_id, entity, entity_id, metadata or {},
    )
