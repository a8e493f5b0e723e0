from typing import List

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.lab_booking.domain.catalog import Catalog
from src.service.lab_booking.driving_adapter.http_controller.schema.catalog_schema import (
    BuildingResponse,
    CollegeResponse,
    LabResponse,
    TimeSlotResponse,
)


router = APIRouter()


@router.get('/labs', response_model=List[LabResponse])
@Logger.io
@inject
async def list_labs(catalog: Catalog = Depends(Provide[Container.catalog])) -> List[LabResponse]:
    return [LabResponse.from_lab(lab) for lab in catalog.list_labs()]


@router.get('/labs/{code}', response_model=LabResponse)
@Logger.io
@inject
async def get_lab(code: str, catalog: Catalog = Depends(Provide[Container.catalog])) -> LabResponse:
    """Unknown codes show the default lab, the same as the lab browsing page."""
    return LabResponse.from_lab(catalog.get_lab_or_default(code))


@router.get('/time-slots', response_model=List[TimeSlotResponse])
@Logger.io
@inject
async def list_time_slots(
    catalog: Catalog = Depends(Provide[Container.catalog]),
) -> List[TimeSlotResponse]:
    return [TimeSlotResponse.from_slot(slot) for slot in catalog.list_time_slots()]


@router.get('/colleges', response_model=List[CollegeResponse])
@Logger.io
@inject
async def list_colleges(
    catalog: Catalog = Depends(Provide[Container.catalog]),
) -> List[CollegeResponse]:
    return [CollegeResponse.from_college(college) for college in catalog.list_colleges()]


@router.get('/buildings', response_model=List[BuildingResponse])
@Logger.io
@inject
async def list_buildings(
    catalog: Catalog = Depends(Provide[Container.catalog]),
) -> List[BuildingResponse]:
    return [
        BuildingResponse(
            key=key, name=name, labs=[lab.code for lab in catalog.labs_in_building(key)]
        )
        for key, name in catalog.buildings().items()
    ]
