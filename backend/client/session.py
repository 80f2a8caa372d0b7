"""
Client session store.

Holds who the client believes is signed in. The server is the only source
of truth: the store becomes authenticated only after a successful profile
fetch or an explicit login/signup response, never on its own.

The store is a reducer over dispatched actions. Async flows (rehydrate,
login, signup, logout, save_profile) talk to the API and dispatch the
resulting actions.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Optional, Union

from .api import ApiError, DashboardApi

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"


class _Unchecked:
    """Sentinel: the session has not been checked with the server yet."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNCHECKED"

    def __bool__(self) -> bool:
        return False


UNCHECKED = _Unchecked()

UserRecord = dict[str, Any]


class LoadingStatus(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class SessionState:
    """
    Snapshot of the client's auth state.

    user is UNCHECKED before the first server check, None once the server
    said there is no session, or the public user record.
    """

    user: Union[UserRecord, None, _Unchecked] = UNCHECKED
    is_authenticated: bool = False
    loading: LoadingStatus = LoadingStatus.IDLE
    error: Optional[str] = None
    country_code: Optional[str] = None

    @property
    def is_checked(self) -> bool:
        return self.user is not UNCHECKED


class ActionType(str, Enum):
    SET_USER = "user/setUser"
    UPDATE_USER = "user/updateUser"
    LOGOUT = "user/logout"
    DELETE_USER = "user/deleteUser"
    SET_COUNTRY_CODE = "user/setCountryCode"
    PROFILE_PENDING = "user/fetchUserProfile/pending"
    PROFILE_FULFILLED = "user/fetchUserProfile/fulfilled"
    PROFILE_REJECTED = "user/fetchUserProfile/rejected"


@dataclass(frozen=True)
class Action:
    type: ActionType
    payload: Any = None


def set_user(user: UserRecord) -> Action:
    return Action(ActionType.SET_USER, user)


def update_user(changes: UserRecord) -> Action:
    return Action(ActionType.UPDATE_USER, changes)


def logout_action() -> Action:
    return Action(ActionType.LOGOUT)


def delete_user() -> Action:
    return Action(ActionType.DELETE_USER)


def set_country_code(code: Optional[str]) -> Action:
    return Action(ActionType.SET_COUNTRY_CODE, code)


def reduce(state: SessionState, action: Action) -> SessionState:
    """Pure state transition for one action. Unknown actions are ignored."""
    kind = action.type

    if kind == ActionType.SET_USER:
        # Settles a pending profile fetch
        loading = LoadingStatus.SUCCEEDED if state.loading == LoadingStatus.PENDING else state.loading
        return replace(state, user=action.payload, is_authenticated=True, loading=loading)

    if kind == ActionType.UPDATE_USER:
        # Shallow merge, and only onto an existing user
        if isinstance(state.user, dict):
            return replace(state, user={**state.user, **action.payload})
        return state

    if kind in (ActionType.LOGOUT, ActionType.DELETE_USER):
        return replace(state, user=None, is_authenticated=False)

    if kind == ActionType.SET_COUNTRY_CODE:
        return replace(state, country_code=action.payload)

    if kind == ActionType.PROFILE_PENDING:
        return replace(state, loading=LoadingStatus.PENDING, error=None)

    # Profile results only apply while their fetch is still pending
    settled = state.loading != LoadingStatus.PENDING
    if kind in (ActionType.PROFILE_FULFILLED, ActionType.PROFILE_REJECTED) and settled:
        return state

    if kind == ActionType.PROFILE_FULFILLED:
        return replace(
            state,
            user=action.payload,
            is_authenticated=True,
            loading=LoadingStatus.SUCCEEDED,
            error=None,
        )

    if kind == ActionType.PROFILE_REJECTED:
        return replace(
            state,
            user=None,
            is_authenticated=False,
            loading=LoadingStatus.FAILED,
            error=action.payload,
        )

    return state


Listener = Callable[[SessionState], None]


class SessionStore:
    """
    Observable container for SessionState.

    Listeners are called with the new state after every dispatch that
    changes it.
    """

    def __init__(self, state: Optional[SessionState] = None):
        self._state = state or SessionState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> SessionState:
        return self._state

    def dispatch(self, action: Action) -> SessionState:
        new_state = reduce(self._state, action)
        if new_state != self._state:
            self._state = new_state
            for listener in list(self._listeners):
                listener(new_state)
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener. Returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe


async def rehydrate(store: SessionStore, api: DashboardApi) -> SessionState:
    """
    Sync the store with the server's view of the session cookie.

    Runs only while there is no user in the store and no fetch in flight.
    """
    state = store.state
    if isinstance(state.user, dict) or state.loading == LoadingStatus.PENDING:
        return state

    store.dispatch(Action(ActionType.PROFILE_PENDING))
    try:
        user = await api.get_profile()
    except ApiError as e:
        logger.info(f"Session rehydration failed: {e.message}")
        return store.dispatch(Action(ActionType.PROFILE_REJECTED, e.message or "Failed to fetch user"))
    except (KeyError, TypeError) as e:
        logger.warning(f"Malformed profile response: {e!r}")
        return store.dispatch(Action(ActionType.PROFILE_REJECTED, "Failed to fetch user"))
    return store.dispatch(Action(ActionType.PROFILE_FULFILLED, user))


async def login(store: SessionStore, api: DashboardApi, username: str, password: str) -> UserRecord:
    """Log in and record the returned user. ApiError propagates to the caller."""
    body = await api.login(username, password)
    store.dispatch(set_user(body["user"]))
    return body["user"]


async def signup(
    store: SessionStore,
    api: DashboardApi,
    username: str,
    email: str,
    password: str,
) -> UserRecord:
    body = await api.signup(username, email, password)
    store.dispatch(set_user(body["user"]))
    return body["user"]


async def logout(store: SessionStore, api: DashboardApi) -> None:
    """Expire the server cookie, then forget the user locally."""
    await api.logout()
    store.dispatch(logout_action())


async def save_profile(store: SessionStore, api: DashboardApi, changes: UserRecord) -> UserRecord:
    """Persist profile edits and merge the server's copy into the store."""
    user = await api.update_profile(changes)
    store.dispatch(update_user(user))
    return user


class ViewDecision(str, Enum):
    LOADING = "loading"
    REDIRECT = "redirect"
    RENDER = "render"


def guard_protected_view(state: SessionState) -> ViewDecision:
    """
    What a protected page should show for the current session state.

    Loading until the server has answered, a redirect to /login once it has
    said no, and the page only for an authenticated user.
    """
    if state.is_authenticated and isinstance(state.user, dict):
        return ViewDecision.RENDER
    if state.loading == LoadingStatus.PENDING or not state.is_checked:
        return ViewDecision.LOADING
    return ViewDecision.REDIRECT
