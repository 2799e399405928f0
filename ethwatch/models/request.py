from pydantic import BaseModel


class SubscribeRequest(BaseModel):
    address: str
