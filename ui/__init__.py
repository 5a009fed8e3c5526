"""Textual widgets that project application state onto the terminal."""
