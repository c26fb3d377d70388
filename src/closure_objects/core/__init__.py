"""
Core of the object runtime.

- cells: StateCell, storage exposed read-only through a dispatcher
- dispatcher: create_object and method resolution
- factory: the construction convention (@factory, ObjectContext)
- errors: the exception hierarchy
- self_logger: per-object dispatch logs

Import the public names from the closure_objects package.
"""
