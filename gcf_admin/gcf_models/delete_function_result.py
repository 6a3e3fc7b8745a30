from abc import ABC
from dataclasses import dataclass
from typing import Any, Dict

from ..errors import FunctionNotFoundError


@dataclass(frozen=True, kw_only=True)
class DeleteFunctionResult(ABC):
    """Result of a Cloud Function deletion. Abstract base class."""
    function_name: str

    @property
    def success(self) -> bool:
        return isinstance(self, DeleteSuccess)

    def to_dict(self) -> Dict[str, Any]:
        return {'function_name': self.function_name, 'success': self.success}


@dataclass(frozen=True, kw_only=True)
class DeleteSuccess(DeleteFunctionResult):
    """Successful deletion result."""
    pass


@dataclass(frozen=True, kw_only=True)
class DeleteFailure(DeleteFunctionResult):
    """Failed deletion result."""
    error: Exception

    @property
    def not_found(self) -> bool:
        return isinstance(self.error, FunctionNotFoundError)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d.update({'error': str(self.error), 'not_found': self.not_found})
        return d
