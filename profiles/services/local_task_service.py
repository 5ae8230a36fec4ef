"""
Local tasks (tabs) for profile pages.

On a single-profile edit page, user/<uid>/edit/<type>/<id>, an extra
"Edit <type> profile" tab is offered. Everything else gets no extra tab.
"""
import copy
from typing import Callable, Dict, List, Optional

from profiles.models import ProfileType

BASE_EDIT_TAB = {
    'id': 'profiles.user_edit',
    'route_name': 'profiles:user_edit_profile',
    'base_route': 'profiles:user_view',
    'weight': 10,
}


def tokenize_path(path: str) -> List[str]:
    """
    Segments of a request path, query string ignored.

    Only the leading and trailing slashes are stripped; an empty segment
    inside the path still counts, so 'user//edit/personal/3' has five.
    """
    path = (path or '').split('?', 1)[0].strip('/')
    if not path:
        return []
    return path.split('/')


def derive_edit_tab(segments: List[str], base_definition: dict,
                    type_loader: Callable[[str], Optional[ProfileType]]) -> Optional[dict]:
    """
    Tab definition for the profile edit page, or None.

    ``segments`` must look like ['user', <uid>, 'edit', <type>, <id>] and the
    type must exist.
    """
    if len(segments) != 5:
        return None
    if segments[0] != 'user' or segments[2] != 'edit' or not segments[3]:
        return None

    profile_type = type_loader(segments[3])
    if profile_type is None:
        return None

    tab = copy.deepcopy(base_definition)
    tab['id'] = f"{base_definition.get('id', 'profiles.user_edit')}:{profile_type.code}"
    tab['title'] = f"Edit {profile_type.label} profile"
    tab['route_parameters'] = {
        'type': profile_type.code,
        'id': segments[4],
    }
    return tab


def get_derivative_definitions(path: str, base_definition: Optional[dict] = None,
                               type_loader=ProfileType.load) -> Dict[str, dict]:
    """{type code: tab} for ``path``; empty when no tab applies."""
    tab = derive_edit_tab(tokenize_path(path), base_definition or BASE_EDIT_TAB, type_loader)
    if tab is None:
        return {}
    return {tab['route_parameters']['type']: tab}
