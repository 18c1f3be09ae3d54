"""
Pydantic schemas — API request bodies.

The multipart upload is declared with Form/File parameters on the route.
"""

from pydantic import BaseModel, Field


class ReviewRequest(BaseModel):
    status: str | None = None
    remarks: str | None = None


class VehicleTypeRequest(BaseModel):
    vehicle_type: str = Field(..., alias="vehicleType")

    model_config = {"populate_by_name": True}


class DriverUpsertRequest(BaseModel):
    name: str = ""
    phone: str = ""
    vehicle_type: str | None = Field(default=None, alias="vehicleType")

    model_config = {"populate_by_name": True}
