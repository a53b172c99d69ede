"""QML-facing application facade and state objects.

This package implements the QML↔Python boundary:
- Request/response calls: backend.invoke(name, args) -> {ok, value, error}
- UI flows: backend.dispatch(cmd, payload)
- UI binding via the state QObject (backend.sorter)
- Python→QML notifications via backend.event
"""
