"""Terminal rendering and the Textual form."""
