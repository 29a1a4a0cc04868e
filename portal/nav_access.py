"""Role-based navigation for the portal sidebar and mobile tab bar.

MASTER_MENU is the full, ordered list of nav links. Each role sees the
master list minus the ids in ROLE_EXCLUSIONS[role], in master order.
Valid roles: 'admin', 'technician'.
"""
import logging
from dataclasses import dataclass
from typing import Optional

log = logging.getLogger(__name__)

ADMIN = 'admin'
TECHNICIAN = 'technician'
ROLES = (ADMIN, TECHNICIAN)


class NavigationError(Exception):
    """Base class for navigation policy failures."""


class InvalidRoleError(NavigationError, ValueError):
    def __init__(self, role):
        self.role = role
        super().__init__(f"Unknown role {role!r}; expected one of {', '.join(ROLES)}")


class ConfigurationError(NavigationError, RuntimeError):
    pass


@dataclass(frozen=True)
class MenuItem:
    id: str
    label: str
    path: str

    def to_dict(self, active: bool = False) -> dict:
        return {'id': self.id, 'label': self.label, 'path': self.path, 'active': active}


MASTER_MENU = (
    MenuItem('dashboard',      'Dashboard',       '/dashboard'),
    MenuItem('tech-dashboard', 'Dashboard',       '/tech-dashboard'),
    MenuItem('jobs',           'Jobs',            '/jobs'),
    MenuItem('parts',          'Parts Inventory', '/parts'),
    MenuItem('analytics',      'Analytics',       '/analytics'),
    MenuItem('appliances',     'Appliances',      '/appliances'),
    MenuItem('clients',        'Clients',         '/clients'),
    MenuItem('payout',         'Payout',          '/payout'),
)

ROLE_EXCLUSIONS = {
    ADMIN:      frozenset({'tech-dashboard'}),
    TECHNICIAN: frozenset({'analytics', 'clients', 'dashboard'}),
}

LANDING_PATHS = {
    ADMIN: '/dashboard',
    TECHNICIAN: '/tech-dashboard',
}

PORTAL_HEADERS = {
    ADMIN: ('Admin Dashboard', 'Administrative Portal'),
    TECHNICIAN: ('Tech Dashboard', 'Field Technician Portal'),
}


def _check_role(role, legacy_fallback: bool = False) -> str:
    if role in ROLES:
        return role
    if legacy_fallback:
        # Old sidebar behaviour: anything that is not 'admin' is a technician.
        return TECHNICIAN
    raise InvalidRoleError(role)


def filter_menu(role, items=MASTER_MENU, exclusions=ROLE_EXCLUSIONS, legacy_fallback: bool = False):
    """Return the ordered tuple of menu items ``role`` may see.

    ``items`` is never mutated. Raises InvalidRoleError for anything other
    than 'admin' or 'technician' unless ``legacy_fallback`` is set.
    """
    role = _check_role(role, legacy_fallback)
    excluded = exclusions[role]
    visible = tuple(item for item in items if item.id not in excluded)
    log.debug("nav filter role=%s visible=%s", role, [i.id for i in visible])
    return visible


def resolve_active(items, current_path):
    """Return the item whose path is exactly ``current_path``, else None.

    No prefix matching and no trailing-slash normalization. If several
    items share the path the result is ambiguous and None is returned.
    """
    if not isinstance(current_path, str) or not current_path:
        raise ValueError("current_path must be a non-empty string")
    matches = [item for item in items if item.path == current_path]
    if len(matches) != 1:
        return None
    return matches[0]


def landing_path(role, legacy_fallback: bool = False) -> str:
    return LANDING_PATHS[_check_role(role, legacy_fallback)]


def portal_header(role, legacy_fallback: bool = False):
    return PORTAL_HEADERS[_check_role(role, legacy_fallback)]


def validate_menu(items, exclusions=ROLE_EXCLUSIONS):
    """Raise ConfigurationError if ids or paths repeat, or a rule is missing or names an unknown id."""
    seen_ids = set()
    seen_paths = set()
    for item in items:
        if item.id in seen_ids:
            raise ConfigurationError(f"Duplicate menu id {item.id!r}")
        if item.path in seen_paths:
            raise ConfigurationError(f"Duplicate menu path {item.path!r} (item {item.id!r})")
        seen_ids.add(item.id)
        seen_paths.add(item.path)
    missing_roles = set(ROLES) - set(exclusions)
    if missing_roles:
        raise ConfigurationError(f"No exclusion rule for role(s): {', '.join(sorted(missing_roles))}")
    for role, ids in exclusions.items():
        unknown = set(ids) - seen_ids
        if unknown:
            raise ConfigurationError(
                f"Exclusion rule for {role!r} names unknown id(s): {', '.join(sorted(unknown))}"
            )


@dataclass(frozen=True)
class NavigationState:
    role: str
    items: tuple
    active: Optional[MenuItem] = None

    def to_dict(self) -> dict:
        return {
            'role': self.role,
            'items': [i.to_dict(active=(i == self.active)) for i in self.items],
            'active': self.active.id if self.active else None,
        }


class NavigationPolicy:
    """Master menu plus role rules, validated once at startup.

    With ``legacy_role_fallback`` every role-taking method treats any value
    other than 'admin' as 'technician'.
    """

    def __init__(self, items=MASTER_MENU, exclusions=ROLE_EXCLUSIONS, legacy_role_fallback: bool = False):
        self.items = tuple(items)
        self.exclusions = {role: frozenset(ids) for role, ids in exclusions.items()}
        self.legacy_role_fallback = legacy_role_fallback
        validate_menu(self.items, self.exclusions)

    def normalize_role(self, role) -> str:
        return _check_role(role, self.legacy_role_fallback)

    def filter_menu(self, role):
        return filter_menu(role, self.items, self.exclusions, legacy_fallback=self.legacy_role_fallback)

    def resolve_active(self, items, current_path):
        return resolve_active(items, current_path)

    def landing_path(self, role) -> str:
        return landing_path(role, self.legacy_role_fallback)

    def portal_header(self, role):
        return portal_header(role, self.legacy_role_fallback)

    def navigation_state(self, role, current_path) -> NavigationState:
        items = self.filter_menu(role)
        return NavigationState(role=self.normalize_role(role), items=items,
                               active=resolve_active(items, current_path))
