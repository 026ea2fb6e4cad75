"""
Palette and calendar constants shared by the store and the views.

Category colors double as chart colors: seeded categories take the first
eight entries, custom categories cycle through CHART_COLORS.
"""

MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

GRAY = "#95A5A6"

CHART_COLORS = (
    "#FF6B6B",
    "#4ECDC4",
    "#45B7D1",
    "#FFA07A",
    "#98D8C8",
    "#DDA0DD",
    "#20B2AA",
    "#F0E68C",
    "#D3D3D3",
    "#FFB6C1",
    "#87CEEB",
    "#F4A460",
    "#98FB98",
    "#DDA0DD",
    "#F0E68C",
)

DEFAULT_CATEGORY_ICON = "📝"

# (id, name, color, icon) for the categories every fresh install starts with
SEED_CATEGORIES = (
    ("1", "Food", "#FF6B6B", "🍔"),
    ("2", "Shopping", "#4ECDC4", "🛍️"),
    ("3", "Transport", "#45B7D1", "🚗"),
    ("4", "Entertainment", "#FFA07A", "🎬"),
    ("5", "Health", "#98D8C8", "🏥"),
    ("6", "Education", "#DDA0DD", "📚"),
    ("7", "Travel", "#20B2AA", "✈️"),
    ("8", "Bills", "#F0E68C", "💡"),
)

# Key-value store keys
SPENDINGS_KEY = "spendings"
CATEGORIES_KEY = "categories"
FIRST_LAUNCH_KEY = "hasLaunchedBefore"


def next_category_color(category_count: int) -> str:
    """Color for a new custom category given how many categories exist."""
    return CHART_COLORS[category_count % len(CHART_COLORS)]
