"""
Object Errors

Every failure the runtime itself raises derives from ObjectError.

Design principles:
- Resolution failures (MethodNotFoundError, UnknownPathError) carry the
  requested name and the object whose resolution failed
- Errors raised by behaviors are never wrapped; they propagate unmodified
- A failed dispatch never changes an object's tables
"""

from typing import Optional


class ObjectError(Exception):
    """Base exception for object runtime errors"""
    pass


class MethodNotFoundError(ObjectError):
    """Raised when a name resolves to no method, state cell or fallback"""

    def __init__(self, name: str, object_name: Optional[str] = None):
        self.name = name
        self.object_name = object_name
        where = f" on object '{object_name}'" if object_name else ""
        super().__init__(f"Method not found: '{name}'{where}")


class UnknownPathError(ObjectError):
    """Raised when a qualified name's leading segment is not a parent name"""

    def __init__(self, segment: str, name: str, object_name: Optional[str] = None):
        self.segment = segment
        self.name = name
        self.object_name = object_name
        where = f" on object '{object_name}'" if object_name else ""
        super().__init__(
            f"Unknown path segment '{segment}' in '{name}'{where}"
        )


class FactoryError(ObjectError):
    """Raised when a factory is defined or invoked incorrectly"""
    pass


class ClassFileError(ObjectError):
    """Base exception for class file loading errors"""
    pass


class ClassFileNotFoundError(ClassFileError):
    """Raised when class file doesn't exist"""
    pass


class ClassFileLoadError(ClassFileError):
    """Raised when class file can't be loaded (syntax error, import error)"""
    pass


class ConfigError(ObjectError):
    """Raised when a configuration value is missing or invalid"""
    pass


# Short names for the two resolution failures
MethodNotFound = MethodNotFoundError
UnknownPath = UnknownPathError
