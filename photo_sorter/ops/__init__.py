"""Use-case / operations layer.

Headless actions invoked by the backend: scanning a folder for photos and
copying a photo into a destination folder.

Nothing in this package imports Qt.
"""
