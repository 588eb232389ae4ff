import logging
from tkinter import Canvas, Tk

from beatdeck.Core import GameEngine, IN_PROGRESS, LOST, WON, InvalidDeckError
from beatdeck.DeckSource import DeckSourceError, makeDeckSource
from beatdeck.Interface import Interface
from beatdeck_ui.adapter import CoreAdapter
from beatdeck_ui.controls import dispatch_key, normalize_key
from beatdeck_ui.settings_store import load_settings
from beatdeck_ui.ui_config import (
    CARD_GAP_RATIO,
    CARD_HEIGHT_RATIO,
    CARD_WIDTH_RATIO,
    FONT_SCALE_FACTOR,
    GRID_COLUMNS,
    THEMES,
    TOP_MARGIN_RATIO,
)

logger = logging.getLogger(__name__)


class TkInterface(Interface):
    """
    Tk front end: click or press 1-9 to pick a stack, arrows to move the selection,
    up/down to guess, space for a random guess, n for a new game.
    """

    def __init__(self, width=720, height=760):
        super().__init__()
        self.width = width
        self.height = height
        self.root = None
        self.canvas = None
        self.settings = load_settings()
        self.theme_name = self.settings["theme_name"]
        self.font_scale = self.settings["font_scale"]
        self.message = ""

    @property
    def theme(self):
        return THEMES[self.theme_name]

    def run(self):
        root = Tk()
        root.title("Beat the Deck")
        self.root = root
        canvas = Canvas(root, width=self.width, height=self.height)
        canvas.configure(bd=0, highlightthickness=0)
        canvas.pack(expand=1, fill="both")
        self.canvas = canvas
        root.bind("<Configure>", self.on_resize)
        root.bind("<Button-1>", self.on_press)
        root.bind("<Key>", self.on_key)
        self.start_new_game()
        root.mainloop()

    def start_new_game(self):
        try:
            self.core.startGame()
        except (DeckSourceError, InvalidDeckError) as e:
            logger.warning("Could not start a game: %s", e)
            self.message = f"Could not get a deck: {e}"
            self.request_redraw()

    def onStart(self):
        self.message = "Pick a stack, then guess higher or lower."

    def onEvent(self, event):
        self.message = CoreAdapter.event_to_message(event)
        super().onEvent(event)

    def notifyRedraw(self):
        self.request_redraw()

    def onWin(self):
        self.message = "You won! Press n to play again."

    def onLose(self):
        self.message = "You lost. Press n to play again."

    def handle_key(self, key: str) -> bool:
        key = normalize_key(key)
        if key == "n":
            if self.core.state is not None and self.core.state.status == IN_PROGRESS:
                return False
            self.start_new_game()
            return True
        if key == "escape":
            if self.root is not None:
                self.root.destroy()
            return True
        handled = dispatch_key(self.core, key)
        self.request_redraw()
        return handled

    def on_key(self, event):
        self.handle_key(event.keysym)

    def on_resize(self, event):
        if event.widget != self.root:
            return
        self.width = event.width
        self.height = event.height
        self.request_redraw()

    def on_press(self, event):
        idx = self.stack_at(event.x, event.y)
        if idx is not None:
            self.core.selectStack(idx)

    def layout(self):
        cw = self.width * CARD_WIDTH_RATIO
        ch = self.height * CARD_HEIGHT_RATIO
        gap = self.width * CARD_GAP_RATIO
        total_w = GRID_COLUMNS * cw + (GRID_COLUMNS - 1) * gap
        left = (self.width - total_w) / 2
        top = self.height * TOP_MARGIN_RATIO
        rects = []
        for i in range(GRID_COLUMNS * GRID_COLUMNS):
            row, col = divmod(i, GRID_COLUMNS)
            x = left + col * (cw + gap)
            y = top + row * (ch + gap)
            rects.append((x, y, x + cw, y + ch))
        return rects

    def stack_at(self, x, y):
        for i, (x1, y1, x2, y2) in enumerate(self.layout()):
            if x1 <= x <= x2 and y1 <= y <= y2:
                return i
        return None

    def request_redraw(self):
        if self.canvas is None:
            return
        self.redraw_all()

    def redraw_all(self):
        canvas = self.canvas
        theme = self.theme
        scale = FONT_SCALE_FACTOR[self.font_scale]
        canvas.delete("all")
        canvas.create_rectangle(0, 0, self.width, self.height, fill=theme["bg_base"], outline="")
        vm = CoreAdapter.snapshot(self.core)
        canvas.create_text(self.width / 2, self.height * 0.04, text="Beat the Deck", fill=theme["hud_text"],
                           font=f"Helvetica {int(22 * scale)} bold")

        rects = self.layout()
        for stack in vm.stacks:
            x1, y1, x2, y2 = rects[stack.index]
            if stack.flipped:
                canvas.create_rectangle(x1, y1, x2, y2, fill=theme["card_back"], outline=theme["card_border"])
                canvas.create_text((x1 + x2) / 2, (y1 + y2) / 2, text="###", fill=theme["hud_subtext"],
                                   font=f"Helvetica {int(14 * scale)} bold")
                continue
            outline = theme["card_select"] if stack.selected else theme["card_border"]
            canvas.create_rectangle(x1, y1, x2, y2, fill=theme["card_front"], outline=outline,
                                    width=4 if stack.selected else 1)
            color = "#dc2626" if stack.suit in ("HEARTS", "DIAMONDS") else "#111827"
            canvas.create_text((x1 + x2) / 2, (y1 + y2) / 2, text=stack.label, fill=color,
                               font=f"Helvetica {int(26 * scale)} bold")

        bottom = rects[-1][3] if rects else self.height * 0.8
        canvas.create_text(self.width / 2, bottom + 30, text=f"Cards remaining in deck: {vm.remaining_count}",
                           fill=theme["hud_text"], font=f"Helvetica {int(14 * scale)}")
        color = theme["hud_subtext"]
        if vm.status == WON:
            color = theme["win"]
        elif vm.status == LOST:
            color = theme["lose"]
        canvas.create_text(self.width / 2, bottom + 60, text=self.message, fill=color,
                           font=f"Helvetica {int(14 * scale)} bold")


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    interface = TkInterface()
    core = GameEngine(makeDeckSource(interface.settings))
    core.registerInterface(interface)
    interface.run()


if __name__ == '__main__':
    main()
