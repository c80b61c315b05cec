"""
Pydantic schemas for campaigns and delivery log ingestion.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

class CampaignRead(BaseModel):
    campaign_id: str
    campaign_name: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class CampaignUploadRead(BaseModel):
    upload_id: str
    campaign_id: str
    file_name: str
    stored_path: str
    uploaded_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class DeliveryLogUpload(BaseModel):
    file_name: str = Field(min_length=1, max_length=255)
    csv_text: str = Field(description="Raw CSV content of the delivery log")
    campaign_name: Optional[str] = Field(None, max_length=300, description="Defaults to the file name")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "file_name": "summer_promo.csv",
            "campaign_name": "Summer Promo",
            "csv_text": "Campaign Name,Content Title,Content Network Name,Impression,Quartile100\n"
                        "Summer Promo,Show A,Hulu,1000,500\n",
        }
    })

class IngestCounts(BaseModel):
    rows_processed: int
    rows_inserted: int
    parse_errors: int

class IngestResponse(BaseModel):
    success: bool = True
    campaign: CampaignRead
    upload: CampaignUploadRead
    content: IngestCounts
