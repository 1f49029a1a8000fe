"""dhsession command-line interface."""
