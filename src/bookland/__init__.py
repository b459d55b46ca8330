# ABOUTME: Bookland, a personal ebook library manager.
# ABOUTME: Catalogs EPUB, PDF, and CBZ files with their titles, authors, and covers.
