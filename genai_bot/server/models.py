from typing import Literal

from pydantic import BaseModel


StatusValue = Literal["ok", "error"]


class StatusResponse(BaseModel):
	status: StatusValue
	engine: str
	storage: str
	search: bool
