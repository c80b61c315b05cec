"""
Pydantic schemas for alias / genre / content mapping management.
"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator

class NetworkAliasCreate(BaseModel):
    alias: str = Field(min_length=1, max_length=200, description="Display name used in reports")
    network_names: List[str] = Field(min_length=1, description="Raw content network names grouped under the alias")

    @field_validator("network_names")
    @classmethod
    def _drop_blank_names(cls, value: List[str]) -> List[str]:
        names = list(dict.fromkeys(n for n in value if n and n.strip()))
        if not names:
            raise ValueError("network_names must contain at least one non-empty name")
        return names

    model_config = ConfigDict(json_schema_extra={
        "example": {"alias": "Roku", "network_names": ["Roku Channel", "roku-ctv", "The Roku Channel"]}
    })

class NetworkAliasRead(BaseModel):
    id: int
    alias: str
    network_names: List[str]
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class ContentNetworksRead(BaseModel):
    success: bool = True
    network_names: List[str]
    aliases: List[NetworkAliasRead]

class GenreMapUpsert(BaseModel):
    raw_genre: str = Field(min_length=1)
    genre_canon: str = Field(min_length=1)

class GenreMapRead(BaseModel):
    raw_genre: str
    genre_canon: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class ContentAliasUpsert(BaseModel):
    content_title: str = Field(min_length=1, description="Any spelling; canonicalized before storing")
    content_key: str = Field(min_length=1)

class ContentAliasRead(BaseModel):
    content_title_canon: str
    content_key: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
