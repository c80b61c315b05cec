"""
SQLAlchemy model for raw delivery line items ingested from campaign CSV logs.
Rows are written once at ingestion and only removed with their campaign.
"""
from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from rollup_reports.database import Base

class CampaignContentRaw(Base):
    __tablename__ = "campaign_content_raw"

    id = Column(Integer, primary_key=True, index=True)
    campaign_id = Column(String, ForeignKey("campaigns.campaign_id"), nullable=False, index=True)

    # As uploaded
    campaign_name_src = Column(String, nullable=True)
    content_title = Column(String, nullable=False, default="")
    content_network_name = Column(String, nullable=False, default="", index=True)

    # Delivery counts; quartile100 is not checked against impression
    impression = Column(Integer, nullable=False, default=0)
    quartile100 = Column(Integer, nullable=False, default=0)

    campaign = relationship("Campaign", back_populates="content_rows")
