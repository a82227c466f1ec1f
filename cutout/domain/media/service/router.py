"""Action routing for the single media endpoint.

Routing is two pure steps: pick an action (explicit hint, else a default by
method), then check the method allows it. The method is authoritative, so a
hint can narrow what happens but never unlock a side effect the method does
not imply.
"""

from cutout.domain.media.model.value import Action
from cutout.domain.shared.error import UnsupportedActionError

DEFAULT_ACTIONS: dict[str, Action] = {
    "POST": Action.UPLOAD,
    "DELETE": Action.DELETE,
}

REQUIRED_METHOD: dict[Action, str] = {
    Action.UPLOAD: "POST",
    Action.LIST: "GET",
    Action.DELETE: "DELETE",
}


def select_action(method: str, explicit_action: str | None) -> str:
    if explicit_action:
        return explicit_action
    return DEFAULT_ACTIONS.get(method.upper(), Action.LIST).value


def validate_action(method: str, action: str) -> Action:
    try:
        resolved = Action(action)
    except ValueError:
        raise UnsupportedActionError(method, action) from None
    if REQUIRED_METHOD[resolved] != method.upper():
        raise UnsupportedActionError(method, action)
    return resolved


def route(method: str, explicit_action: str | None = None) -> Action:
    """Resolve the action for a request, raising UnsupportedActionError if none applies."""
    return validate_action(method, select_action(method, explicit_action))
