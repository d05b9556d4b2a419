# blockhub/catalog/regions.py
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

ALL_REGIONS = "*"
DEFAULT_REGION = "default"


@dataclass(frozen=True)
class Region:
    key: str
    label: str
    flag: str
    description: str


ALL_REGIONS_OPTION = Region(
    key=ALL_REGIONS,
    label="All regions",
    flag="🌍",
    description="Applies to every region at once",
)

REGIONS: tuple[Region, ...] = (
    Region(DEFAULT_REGION, "Default", "🌐", "Global default release"),
    Region("cn", "Mainland China", "🇨🇳", "Mainland China"),
    Region("hk", "Hong Kong", "🇭🇰", "Hong Kong SAR"),
    Region("us", "United States", "🇺🇸", "United States"),
    Region("eu", "Europe", "🇪🇺", "European Union"),
    Region("sea", "Southeast Asia", "🌏", "Southeast Asia"),
    Region("sg", "Singapore", "🇸🇬", "Singapore"),
    Region("jp", "Japan", "🇯🇵", "Japan"),
    Region("kr", "South Korea", "🇰🇷", "South Korea"),
)

# Options offered when scoping a member; the sentinel comes first
MEMBER_REGION_OPTIONS: tuple[Region, ...] = (ALL_REGIONS_OPTION, *REGIONS)

_REGION_MAP: Dict[str, Region] = {region.key: region for region in MEMBER_REGION_OPTIONS}


def get_region(key: str) -> Optional[Region]:
    return _REGION_MAP.get(key)


def is_known_region(key: str) -> bool:
    return key in _REGION_MAP


def get_region_label(key: str) -> str:
    region = get_region(key)
    return region.label if region else key


def get_region_flag(key: str) -> str:
    region = get_region(key)
    return region.flag if region else "🌐"


def get_region_description(key: str) -> str:
    region = get_region(key)
    return region.description if region else ""


def region_matches(version_region: str, wanted: Optional[str]) -> bool:
    """
    True when a version tagged ``version_region`` applies to ``wanted``.

    The sentinel on either side matches everything.
    """
    if not wanted or wanted == ALL_REGIONS:
        return True
    return version_region in (wanted, ALL_REGIONS)


def normalize_regions(regions: Optional[Iterable[str]]) -> List[str]:
    """
    Canonical member region list:
    - nothing selected -> ["default"]
    - sentinel selected -> ["*"]
    - otherwise unique keys in first-seen order
    """
    keys = list(regions or [])
    if not keys:
        return [DEFAULT_REGION]
    if ALL_REGIONS in keys:
        return [ALL_REGIONS]
    return list(dict.fromkeys(keys))
