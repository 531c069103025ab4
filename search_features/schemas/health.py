from typing import Dict

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    version: str
    environment: str
    service_name: str
    services: Dict[str, str]
