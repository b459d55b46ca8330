# ABOUTME: Library operations built on the format extractors and the catalog.
# ABOUTME: Scanning, single-file import, and cover replacement.
