from contextlib import contextmanager
from typing import Iterator

from core.domain.errors import RepositoryError, TaskError


@contextmanager
def wrap_errors(label: str, wrap_domain: bool = True) -> Iterator[None]:
    """Prefix errors raised inside the block with an operation label.

    Domain errors keep their class so callers can still tell them apart;
    anything else is reported as a RepositoryError. With ``wrap_domain``
    off, domain errors pass through untouched.
    """
    try:
        yield
    except TaskError as e:
        if not wrap_domain:
            raise
        raise e.with_context(label) from e
    except Exception as e:
        raise RepositoryError(f"{label}: {e}") from e
