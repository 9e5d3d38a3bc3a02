from pydantic import BaseModel, Field


class TokenClaims(BaseModel):
    email: str = Field(min_length=1)

    model_config = {"extra": "allow"}


class SuccessResponse(BaseModel):
    success: bool = True
