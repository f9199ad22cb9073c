"""Bookshelf: a book catalog web service backed by one JSON document."""
