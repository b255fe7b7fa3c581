from typing import Any

from fastapi.responses import JSONResponse
from neuroglia.core import OperationResult
from neuroglia.dependency_injection import ServiceProviderBase
from neuroglia.mapping import Mapper
from neuroglia.mediation import Mediator
from neuroglia.mvc import ControllerBase


class TaskboardControllerBase(ControllerBase):
    """Controller base rendering failed operations as ``{"message": ...}``."""

    def __init__(self, service_provider: ServiceProviderBase, mapper: Mapper, mediator: Mediator) -> None:
        super().__init__(service_provider, mapper, mediator)

    def respond(self, result: OperationResult) -> Any:
        if result.is_success:
            return self.process(result)
        return JSONResponse(status_code=result.status, content={"message": result.detail})
