from typing import Any


def _equality_class(value: Any) -> type:
    # bool is an int subclass but never equal to a number here
    if isinstance(value, bool):
        return bool
    if isinstance(value, (int, float)):
        return float
    return type(value)


def strict_equals(left: Any, right: Any) -> bool:
    """Equality without coercion: 1 matches 1.0, but True does not match 1 and "1" does not match 1"""
    if _equality_class(left) is not _equality_class(right):
        return False
    return left == right
