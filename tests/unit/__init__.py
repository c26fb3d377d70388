"""Unit tests for closure_objects.

Fast, isolated tests for individual components.
No network; filesystem only under temporary directories.
"""
