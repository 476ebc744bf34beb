from pydantic import BaseModel


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class CountResponse(MessageResponse):
    count: int
