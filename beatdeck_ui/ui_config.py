from beatdeck.Core import HIGHER, LEFT, LOWER, RIGHT

GRID_COLUMNS = 3

CARD_WIDTH_RATIO = 0.16
CARD_HEIGHT_RATIO = 0.24
CARD_GAP_RATIO = 0.03
TOP_MARGIN_RATIO = 0.1

DECK_SOURCE_ORDER = ("local", "remote")
THEME_ORDER = ("Forest", "Ocean", "Sunset")
FONT_SCALE_ORDER = ("Small", "Normal", "Large")
FONT_SCALE_FACTOR = {
    "Small": 0.9,
    "Normal": 1.0,
    "Large": 1.25,
}

# key name -> (action, argument)
KEY_ACTIONS = {
    "left": ("adjacent", LEFT),
    "a": ("adjacent", LEFT),
    "right": ("adjacent", RIGHT),
    "d": ("adjacent", RIGHT),
    "up": ("guess", HIGHER),
    "h": ("guess", HIGHER),
    "down": ("guess", LOWER),
    "l": ("guess", LOWER),
    "space": ("random", None),
    "r": ("random", None),
}
KEY_ACTIONS.update({str(i): ("select", i - 1) for i in range(1, 10)})

THEMES = {
    "Forest": {
        "bg_base": "#1b4332",
        "hud_text": "#f1f5f9",
        "hud_subtext": "#d1fae5",
        "card_front": "#f7e8bc",
        "card_back": "#334155",
        "card_border": "#0f172a",
        "card_select": "#fde047",
        "win": "#4ade80",
        "lose": "#ef4444",
    },
    "Ocean": {
        "bg_base": "#0b2545",
        "hud_text": "#e0f2fe",
        "hud_subtext": "#bae6fd",
        "card_front": "#f8fafc",
        "card_back": "#1e3a8a",
        "card_border": "#082f49",
        "card_select": "#38bdf8",
        "win": "#22d3ee",
        "lose": "#fb7185",
    },
    "Sunset": {
        "bg_base": "#3f1d38",
        "hud_text": "#fff7ed",
        "hud_subtext": "#fed7aa",
        "card_front": "#fffbeb",
        "card_back": "#7c2d12",
        "card_border": "#431407",
        "card_select": "#fb7185",
        "win": "#f59e0b",
        "lose": "#ef4444",
    },
}
