"""Portal command-line interface."""
