"""Static icon catalogue for categories.

The client renders icons by symbolic name. The server only keeps names it
knows about and falls back to FALLBACK_ICON for anything else, so a stored
category never points at a symbol the picker cannot draw.
"""

FALLBACK_ICON = "Tag"

COMMON_ICONS = (
    "Layout", "Server", "Code", "Database", "Settings", "Tag",
    "Folder", "File", "FileText", "FileCode", "Image", "Video",
    "Music", "Mic", "Camera", "Monitor", "Smartphone", "Tablet",
    "Globe", "Cloud", "Lock", "Key", "Shield", "User", "Users",
    "Heart", "Star", "Bookmark", "Flag", "Bell", "Mail", "MessageSquare",
    "Search", "Filter", "Sliders", "Tool", "Wrench", "Zap", "Cpu",
    "HardDrive", "Wifi", "Bluetooth", "Battery", "Power", "Terminal",
    "GitBranch", "GitCommit", "GitMerge", "Github", "Package", "Box",
    "Layers", "Grid", "List", "Table", "Calendar", "Clock", "Timer",
    "Play", "Pause", "Square", "Circle", "Triangle", "Hexagon",
    "Home", "Building", "Map", "MapPin", "Navigation", "Compass",
    "Sun", "Moon", "CloudRain", "Snowflake", "Flame", "Droplet",
    "Bug", "TestTube", "Beaker", "Microscope", "Atom", "Rocket",
    "Palette", "Paintbrush", "Pen", "Pencil", "Edit", "Scissors",
    "Download", "Upload", "Share", "Link", "ExternalLink", "Send",
)

_BY_LOWER = {name.lower(): name for name in COMMON_ICONS}


def resolve_icon(name: str | None) -> str:
    """Map a requested icon name onto the catalogue.

    Matching ignores case and surrounding whitespace; unknown or empty names
    resolve to the fallback.
    """
    if not name:
        return FALLBACK_ICON
    return _BY_LOWER.get(name.strip().lower(), FALLBACK_ICON)
