"""promptgrid command-line interface."""
