"""Photo Sorter: walk through a folder of photos and copy the keepers elsewhere.

Layout:
- ops: headless filesystem operations (scan, copy)
- app: QML-facing backend facade and bindable state
"""
