"""Toolkit-neutral widget construction shared by every host."""
