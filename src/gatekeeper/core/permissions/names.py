"""Permission name helpers.

Permission names are colon-delimited segments, e.g. ``container:own:start``.
The final segment may be the wildcard ``*``.
"""

from gatekeeper.core.constants import PERMISSION_SEPARATOR, WILDCARD_TOKEN


def wildcard_parent(permission: str) -> str:
    """Return the wildcard name covering a permission's immediate parent.

    The last segment is dropped and replaced by ``*``. Only one level is
    considered: ``a:b:c`` maps to ``a:b:*``, never to ``a:*``. Names with
    zero or one segment collapse to ``":*"``.

    Args:
        permission: The requested permission name

    Returns:
        The wildcard candidate name

    Examples:
        >>> wildcard_parent("container:own:start")
        'container:own:*'
        >>> wildcard_parent("invalid")
        ':*'
    """
    parent = permission.split(PERMISSION_SEPARATOR)[:-1]
    return PERMISSION_SEPARATOR.join(parent) + PERMISSION_SEPARATOR + WILDCARD_TOKEN


def is_valid_permission_name(name: str) -> bool:
    """Check that a name can be assigned to a role.

    A valid name has at least one segment, no empty segments, and uses
    the wildcard only as the whole final segment.

    Args:
        name: The candidate permission name

    Returns:
        True if the name may be granted
    """
    if not name:
        return False

    segments = name.split(PERMISSION_SEPARATOR)
    if any(not segment for segment in segments):
        return False

    # A lone "*" grants nothing meaningful and "a*" style globs are not supported
    if len(segments) == 1 and segments[0] == WILDCARD_TOKEN:
        return False
    return all(WILDCARD_TOKEN not in segment for segment in segments[:-1]) and (
        segments[-1] == WILDCARD_TOKEN or WILDCARD_TOKEN not in segments[-1]
    )
