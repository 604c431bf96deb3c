from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from typing import Optional
from ..config import get_settings
from ..contract import CONTENT_URI, COLUMN_PET_GENDER, Gender
from ..middleware.rate_limit import apply_rate_limit
from ..provider import PetProvider, get_provider
from ..schemas.pet import PetCreate, PetUpdate, PetOut, DeletedOut, GenderName, SortKey
from ..uri_matcher import parse_id, with_appended_id

router = APIRouter()

def to_out(row: dict) -> dict:
    row = dict(row)
    gender = Gender.coerce(row.get("gender"))
    row["gender"] = (gender or Gender.UNKNOWN).name.lower()
    return row

def _item_uri(pet_id: int) -> str:
    return with_appended_id(CONTENT_URI, pet_id)

@router.get("", response_model=list[PetOut])
def list_pets(
    gender: Optional[GenderName] = None,
    sort: SortKey = "id",
    provider: PetProvider = Depends(get_provider),
):
    selection, args = None, None
    if gender is not None:
        selection, args = f"{COLUMN_PET_GENDER} = ?", [int(Gender[gender.upper()])]
    cursor = provider.query(CONTENT_URI, selection=selection, selection_args=args, sort_order=sort)
    return [to_out(row) for row in cursor]

@router.get("/{pet_id}", response_model=PetOut)
def get_pet(pet_id: int, provider: PetProvider = Depends(get_provider)):
    pet = provider.query(_item_uri(pet_id)).first()
    if not pet:
        raise HTTPException(status_code=404, detail="Mascota no encontrada")
    return to_out(pet)

@router.post("", response_model=PetOut, status_code=status.HTTP_201_CREATED)
def create_pet(
    payload: PetCreate,
    request: Request,
    response: Response,
    provider: PetProvider = Depends(get_provider),
):
    apply_rate_limit(request, get_settings().write_rate_limit)

    uri = provider.insert(CONTENT_URI, payload.model_dump(exclude_none=True))
    if uri is None:
        raise HTTPException(status_code=500, detail="No se pudo guardar la mascota")

    pet = provider.query(uri).first()
    response.headers["Location"] = f"/pets/{parse_id(uri)}"
    return to_out(pet)

@router.put("/{pet_id}", response_model=PetOut)
def update_pet(
    pet_id: int,
    payload: PetUpdate,
    request: Request,
    provider: PetProvider = Depends(get_provider),
):
    apply_rate_limit(request, get_settings().write_rate_limit)

    uri = _item_uri(pet_id)
    # solo los campos enviados; el resto no se toca
    provider.update(uri, payload.model_dump(exclude_unset=True))
    pet = provider.query(uri).first()
    if not pet:
        raise HTTPException(status_code=404, detail="Mascota no encontrada")
    return to_out(pet)

@router.delete("", response_model=DeletedOut)
def delete_pets(request: Request, provider: PetProvider = Depends(get_provider)):
    apply_rate_limit(request, get_settings().write_rate_limit)
    return {"deleted": provider.delete(CONTENT_URI)}

@router.delete("/{pet_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_pet(pet_id: int, request: Request, provider: PetProvider = Depends(get_provider)):
    apply_rate_limit(request, get_settings().write_rate_limit)

    if provider.delete(_item_uri(pet_id)) == 0:
        raise HTTPException(status_code=404, detail="Mascota no encontrada")
    return None
