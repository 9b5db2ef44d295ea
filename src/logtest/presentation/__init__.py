"""logtest presentation layer: command line front-end."""
