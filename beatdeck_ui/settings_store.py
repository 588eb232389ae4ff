import configparser
from pathlib import Path

from beatdeck.DeckSource import DEFAULT_API_URL, DEFAULT_TIMEOUT
from beatdeck_ui.ui_config import DECK_SOURCE_ORDER, FONT_SCALE_ORDER, THEME_ORDER

SETTINGS_PATH = Path(__file__).with_name("settings.ini")

DECK_KEYS = ("deck_source", "api_url", "timeout", "seed", "deck_code")
UI_KEYS = ("theme_name", "font_scale")

DEFAULT_SETTINGS = {
    "deck_source": "local",
    "api_url": DEFAULT_API_URL,
    "timeout": str(DEFAULT_TIMEOUT),
    "seed": "",
    "deck_code": "",
    "theme_name": "Forest",
    "font_scale": "Normal",
}


def _sanitize(settings):
    data = dict(DEFAULT_SETTINGS)
    data.update({k: str(v).strip() for k, v in settings.items() if k in DEFAULT_SETTINGS and v is not None})

    if data["deck_source"] not in DECK_SOURCE_ORDER:
        data["deck_source"] = DEFAULT_SETTINGS["deck_source"]
    if not data["api_url"].startswith(("http://", "https://")):
        data["api_url"] = DEFAULT_SETTINGS["api_url"]

    try:
        timeout = float(data["timeout"])
    except Exception:
        timeout = DEFAULT_TIMEOUT
    if timeout <= 0:
        timeout = DEFAULT_TIMEOUT
    data["timeout"] = str(timeout)

    if data["seed"]:
        try:
            data["seed"] = str(int(data["seed"]))
        except Exception:
            data["seed"] = ""

    if data["theme_name"] not in THEME_ORDER:
        data["theme_name"] = DEFAULT_SETTINGS["theme_name"]
    if data["font_scale"] not in FONT_SCALE_ORDER:
        data["font_scale"] = DEFAULT_SETTINGS["font_scale"]
    return data


def load_settings():
    parser = configparser.ConfigParser()
    if not SETTINGS_PATH.exists():
        return dict(DEFAULT_SETTINGS)
    try:
        parser.read(SETTINGS_PATH, encoding="utf-8")
    except Exception:
        return dict(DEFAULT_SETTINGS)
    raw = {}
    for section, keys in (("deck", DECK_KEYS), ("ui", UI_KEYS)):
        if section not in parser:
            continue
        for key in keys:
            raw[key] = parser[section].get(key, DEFAULT_SETTINGS[key])
    return _sanitize(raw)


def save_settings(settings):
    data = _sanitize(settings)
    parser = configparser.ConfigParser()
    parser["deck"] = {k: data[k] for k in DECK_KEYS}
    parser["ui"] = {k: data[k] for k in UI_KEYS}
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    with SETTINGS_PATH.open("w", encoding="utf-8") as f:
        parser.write(f)
