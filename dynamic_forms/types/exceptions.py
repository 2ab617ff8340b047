class FormError(Exception):
    """Base exception for dynamic forms"""
    pass


class NotFoundError(FormError):
    """Raised when a referenced field, section or dependency does not exist"""
    pass


class DuplicateFieldError(FormError):
    """Raised when a field is created with an id that is already taken"""
    pass


class DuplicateSectionError(FormError):
    """Raised when a section is added with an id that is already taken"""
    pass


class TypeMismatchError(FormError):
    """Raised when an update tries to change the type of a field"""
    pass


class ConflictError(FormError):
    """Raised when a child field is already bound to a different parent"""
    pass


class InvariantViolation(FormError):
    """Raised when the dependency graph is found in a corrupted state"""
    pass


class DeserializationError(FormError):
    """Raised when a payload cannot be turned into a field or validator"""
    pass
