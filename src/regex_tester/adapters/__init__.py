"""Host adapters that render the session and feed it key events."""
