"""
Result unwrapping for endpoints.

Services return Ok/Err; endpoints want the value or an HTTP error.
`unwrap` hands back the value of an Ok and raises the matching
application exception for an Err, which the registered exception
handlers render.
"""

from typing import TypeVar

from modules.notebook.core.result import Result

T = TypeVar("T")


def unwrap(result: Result[T]) -> T:
    """Return the value of an Ok result or raise the error of an Err."""
    if result.is_ok:
        return result.value
    raise result.to_exception()
