from dataclasses import dataclass
from typing import Any, ClassVar

from dbdumper.exceptions import DbdumperError


@dataclass(frozen=True)
class Success:
    """Operation completed; ``value`` is the dump filename, or None for a load."""

    value: Any = None
    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class Failure:
    """Operation stopped; ``error`` says why."""

    error: DbdumperError
    ok: ClassVar[bool] = False


OperationResult = Success | Failure
