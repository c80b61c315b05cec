from .base import ResponseBase
from .campaigns import CampaignRead, CampaignUploadRead, DeliveryLogUpload, IngestCounts, IngestResponse
from .rollups import (
    AppRollupRead,
    GenreRollupRead,
    ContentRollupRead,
    CampaignStatsRead,
    CampaignReportRead,
    RollupResponse,
)
from .mappings import (
    NetworkAliasCreate,
    NetworkAliasRead,
    ContentNetworksRead,
    GenreMapUpsert,
    GenreMapRead,
    ContentAliasUpsert,
    ContentAliasRead,
)

__all__ = [
    # Base
    "ResponseBase",

    # Campaigns
    "CampaignRead",
    "CampaignUploadRead",
    "DeliveryLogUpload",
    "IngestCounts",
    "IngestResponse",

    # Rollups
    "AppRollupRead",
    "GenreRollupRead",
    "ContentRollupRead",
    "CampaignStatsRead",
    "CampaignReportRead",
    "RollupResponse",

    # Mappings
    "NetworkAliasCreate",
    "NetworkAliasRead",
    "ContentNetworksRead",
    "GenreMapUpsert",
    "GenreMapRead",
    "ContentAliasUpsert",
    "ContentAliasRead",
]
