from beatdeck.Core import GameEngine
from beatdeck_ui.ui_config import KEY_ACTIONS


def normalize_key(key: str) -> str:
    key = key.lower()
    if key == " ":
        return "space"
    return key


def dispatch_key(engine: GameEngine, key: str, pick_direction=None) -> bool:
    """
    Applies one key press to the engine. Returns False for keys without a binding
    and for presses the engine ignored (no selection, finished game, ...).
    """
    binding = KEY_ACTIONS.get(normalize_key(key))
    if binding is None:
        return False
    action, arg = binding
    if action == "select":
        return engine.selectByIndex(arg)
    if action == "adjacent":
        return engine.selectAdjacent(arg)
    if action == "guess":
        return engine.guess(arg).applicable
    if action == "random":
        return engine.randomGuess(pick_direction).applicable
    return False
