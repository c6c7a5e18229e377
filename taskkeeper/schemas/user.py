from pydantic import BaseModel, EmailStr, Field, field_validator

class UserCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=8)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Name is required")
        return value

class UserLogin(BaseModel):
    # Plain strings: a malformed address is just an unknown email at login
    email: str
    password: str

class UserOut(BaseModel):
    id: int
    name: str
    email: str

    model_config = {
        "from_attributes": True
    }
