"""Movie ticket booking event functions."""
