from functools import wraps
from flask import session, abort, current_app
from .models import Technician


def _session_user():
    u = session.get('user')
    return u if isinstance(u, dict) else {}


def current_role():
    """Role of the signed-in user, or None.

    Looks for user_type in session['user']['user_type'], then the legacy flat
    session['user_type'], then the technicians row for session['user']['email'].
    When the app's nav policy runs in legacy mode, any role other than 'admin'
    comes back as 'technician'.
    """
    u = _session_user()
    utype = (u.get('user_type') or '').strip().lower()
    if not utype:
        # Fallback to legacy flat session key
        utype = (session.get('user_type') or '').strip().lower()
    if not utype and u.get('email'):
        tech = Technician.query.filter_by(email=u['email']).first()
        if tech is not None:
            utype = (tech.role or 'technician').strip().lower()
    if not utype:
        return None
    policy = current_app.extensions.get('nav_policy')
    if policy is not None and policy.legacy_role_fallback:
        utype = policy.normalize_role(utype)
    return utype


def role_required(*allowed_roles: str):
    """Decorator to enforce user roles via session.

    Accepts one or more roles (e.g., 'admin', 'technician'); no roles means any
    signed-in user. Aborts with 403 if user not logged in or role not allowed.
    """
    allowed = {str(r).strip().lower() for r in allowed_roles}

    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            utype = current_role()
            if not utype or (allowed and utype not in allowed):
                abort(403)
            return f(*args, **kwargs)
        return wrapper
    return decorator
