"""Core simulation routines."""
