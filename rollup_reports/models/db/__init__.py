from .campaigns import Campaign, CampaignUpload
from .content_rows import CampaignContentRaw
from .mappings import ContentNetworkAlias, GenreMap, ContentAlias
from .enums import RollupType

__all__ = [
    "Campaign",
    "CampaignUpload",
    "CampaignContentRaw",
    "ContentNetworkAlias",
    "GenreMap",
    "ContentAlias",
    "RollupType",
]
