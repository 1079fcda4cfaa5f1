"""
App Store

대시보드 인메모리 상태 (정규화된 목록 + 로딩/에러 상태)와 순수 리듀서.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Optional

STATE_KEYS = ("projects", "deployments", "project_groups", "engineers")


def _flags(value) -> dict:
    return {key: value for key in STATE_KEYS}


@dataclass(frozen=True)
class AppState:
    projects: list = field(default_factory=list)
    deployments: list = field(default_factory=list)
    project_groups: list = field(default_factory=list)
    engineers: list = field(default_factory=list)
    loading: dict = field(default_factory=lambda: _flags(False))
    error: dict = field(default_factory=lambda: _flags(None))


@dataclass(frozen=True)
class Action:
    type: str
    payload: Any = None


# 액션 타입 → 대상 목록
_COLLECTIONS = {
    "PROJECT": "projects",
    "DEPLOYMENT": "deployments",
    "PROJECT_GROUP": "project_groups",
    "ENGINEER": "engineers",
}


def _item_id(item) -> Optional[str]:
    value = item.get("id") if isinstance(item, dict) else getattr(item, "id", None)
    return None if value is None else str(value)


def _set_list(state: AppState, key: str, items) -> AppState:
    return replace(
        state,
        **{key: list(items)},
        loading={**state.loading, key: False},
        error={**state.error, key: None},
    )


def app_reducer(state: AppState, action: Action) -> AppState:
    """새 상태를 반환 (입력 state는 변경하지 않음)"""
    if action.type == "SET_LOADING":
        key, loading = action.payload["key"], action.payload["loading"]
        return replace(state, loading={**state.loading, key: loading})

    if action.type == "SET_ERROR":
        key, error = action.payload["key"], action.payload["error"]
        return replace(state, error={**state.error, key: error})

    verb, _, noun = action.type.partition("_")

    if verb == "SET" and noun.endswith("S") and noun[:-1] in _COLLECTIONS:
        return _set_list(state, _COLLECTIONS[noun[:-1]], action.payload)

    key = _COLLECTIONS.get(noun)
    if key is None or key == "engineers":
        return state

    items = getattr(state, key)

    if verb == "ADD":
        return replace(state, **{key: [*items, action.payload]})

    if verb == "UPDATE":
        updated_id = _item_id(action.payload)
        return replace(state, **{key: [
            action.payload if _item_id(item) == updated_id else item
            for item in items
        ]})

    if verb == "DELETE":
        return replace(state, **{key: [
            item for item in items if _item_id(item) != str(action.payload)
        ]})

    return state


class Store:
    """리듀서 기반 상태 저장소"""

    def __init__(self, reducer=app_reducer, initial_state: Optional[AppState] = None):
        self._reducer = reducer
        self._state = initial_state or AppState()
        self._listeners: list[Callable[[AppState], None]] = []

    @property
    def state(self) -> AppState:
        return self._state

    def dispatch(self, action: Action) -> AppState:
        self._state = self._reducer(self._state, action)
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def subscribe(self, listener: Callable[[AppState], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return _unsubscribe
