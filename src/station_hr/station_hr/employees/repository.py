from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Read access to the employee registry.

    The registry itself (CRUD, import) lives outside this package.
    """

    def get_by_legajo(self, legajo: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Employee]:
        raise NotImplementedError
