"""
Club Request/Response Models
Payload keys are camelCase on the wire
"""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import Optional


class CamelModel(BaseModel):
    """Base model exposing camelCase aliases"""
    
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class CreateClubRequest(CamelModel):
    """Request to create a new club"""
    name: str = Field(..., min_length=1, max_length=100, description="Club name (unique)")
    description: str = Field(..., min_length=1, description="Club description")
    max_capacity: int = Field(..., ge=1, description="Maximum number of joined members")
    
    class Config:
        extra = "forbid"
        json_schema_extra = {
            "example": {
                "name": "Chess",
                "description": "Weekly chess nights",
                "maxCapacity": 20
            }
        }


class UpdateClubRequest(CamelModel):
    """
    Request to update club details
    
    Omitted fields are left unchanged. Explicit nulls pass validation here
    and are rejected by the service.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1)
    max_capacity: Optional[int] = Field(None, ge=1)
    
    class Config:
        extra = "forbid"


class DelegateClubRequest(CamelModel):
    """Transfer club ownership to another member"""
    user_id: int = Field(..., description="New owner id")
    
    class Config:
        extra = "forbid"


class ApproveClubRequest(CamelModel):
    """Approve a pending join request"""
    user_id: int = Field(..., description="Id of the user to approve")
    
    class Config:
        extra = "forbid"


class ClubResponse(CamelModel):
    """Club details response"""
    id: int
    name: str
    description: str
    owner_id: int
    max_capacity: int
    
    class Config:
        from_attributes = True


class ClubListResponse(BaseModel):
    """List of clubs response"""
    total: int
    clubs: list[ClubResponse]
