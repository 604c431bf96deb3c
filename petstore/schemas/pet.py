from pydantic import BaseModel, Field
from typing import Optional, Literal, Union

GenderName = Literal["unknown", "male", "female"]
SortKey = Literal["id", "name", "breed", "gender", "weight"]

# name y gender se validan en el provider, aquí solo tipos y longitudes
class PetCreate(BaseModel):
    name: Optional[str] = Field(None, max_length=80)
    breed: Optional[str] = Field(None, max_length=80)
    gender: Optional[Union[int, str]] = None   # 0/1/2 o "male"
    weight: Optional[int] = None

class PetUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=80)
    breed: Optional[str] = Field(None, max_length=80)
    gender: Optional[Union[int, str]] = None
    weight: Optional[int] = None

class PetOut(BaseModel):
    id: int
    name: str
    breed: Optional[str] = None
    gender: GenderName = "unknown"
    weight: Optional[int] = None

class DeletedOut(BaseModel):
    deleted: int
