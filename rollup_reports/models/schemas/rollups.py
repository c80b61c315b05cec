"""
Pydantic schemas for rollup responses.
Field names match the exported CSV headers.
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict

class AppRollupRead(BaseModel):
    app_name: str
    impressions: int = Field(ge=0)
    completes: int = Field(ge=0)
    avg_vcr: float = Field(ge=0, description="completes / impressions as a percentage, 2 decimals")
    content_count: int = Field(ge=0)

    model_config = ConfigDict(from_attributes=True)

class GenreRollupRead(BaseModel):
    genre_canon: str
    impressions: int = Field(ge=0)
    completes: int = Field(ge=0)
    avg_vcr: float = Field(ge=0)
    content_count: int = Field(ge=0)

    model_config = ConfigDict(from_attributes=True)

class ContentRollupRead(BaseModel):
    content_key: str
    content_title: str
    content_network_name: str
    impressions: int = Field(ge=0)
    completes: int = Field(ge=0)
    avg_vcr: float = Field(ge=0)

    model_config = ConfigDict(from_attributes=True)

class CampaignStatsRead(BaseModel):
    campaign_id: str
    total_impressions: int
    total_completes: int
    overall_vcr: float
    mapped_genres: int
    total_rows: int
    mapped_percentage: float

    model_config = ConfigDict(from_attributes=True)

class CampaignReportRead(BaseModel):
    campaign_id: str
    campaign_name: Optional[str] = None
    app: List[AppRollupRead]
    genre: List[GenreRollupRead]
    content: List[ContentRollupRead]
    stats: CampaignStatsRead

    model_config = ConfigDict(from_attributes=True)

class RollupResponse(BaseModel):
    success: bool = True
    rollup_type: str
    campaign_id: Optional[str] = None
    count: int
    rollup: List[Dict[str, Any]]
