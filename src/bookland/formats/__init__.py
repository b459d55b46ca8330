# ABOUTME: Format-specific extractors for EPUB, PDF, and CBZ files.
# ABOUTME: Every extractor fails soft and returns defaults instead of raising.
