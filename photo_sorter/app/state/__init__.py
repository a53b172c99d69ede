"""Bindable QObject state exposed to QML through the backend facade."""
