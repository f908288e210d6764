"""promptgrid storage - output writers and latest results."""
