import logging

from beatdeck.Core import GRID_SIZE, HIGHER, LEFT, LOST, LOWER, RIGHT, WON, GameEngine, InvalidDeckError
from beatdeck.DeckSource import DeckSourceError, makeDeckSource
from beatdeck.Interface import Interface
from beatdeck_ui.adapter import CoreAdapter
from beatdeck_ui.board_image import save_board_image
from beatdeck_ui.settings_store import load_settings

HELP = "commands: sel N | left | right | hi | lo | rand | new | snap PATH | quit"


class CommandLineInterface(Interface):

    def __init__(self, out=print):
        super().__init__()
        self.out = out

    def printAll(self):
        core = self.core
        vm = CoreAdapter.snapshot(core)
        self.out(f"Cards remaining in deck: {vm.remaining_count}")
        self.out("------1------2------3---")
        for row in range(0, len(vm.stacks), 3):
            line = "   "
            for stack in vm.stacks[row:row + 3]:
                if stack.flipped:
                    text = " ### "
                elif stack.selected:
                    text = f"[{stack.label:>3}]"
                else:
                    text = f" {stack.label:>3} "
                line += text + "  "
            self.out(line)
        self.out("")

    def onStart(self):
        self.out("Game started!")

    def onEvent(self, event):
        self.out(CoreAdapter.event_to_message(event))
        super().onEvent(event)

    def notifyRedraw(self):
        self.printAll()

    def onWin(self):
        self.out("You won!")

    def onLose(self):
        self.out("You lost.")

    def execute(self, command: str) -> bool:
        """
        Runs one typed command; returns False when the command was rejected.
        """
        core = self.core
        parts = command.split()
        if not parts:
            return False
        name = parts[0].lower()
        if name == "sel":
            try:
                idx = int(parts[1]) - 1
            except (IndexError, ValueError):
                self.out("Invalid index!")
                return False
            if idx < 0 or idx >= GRID_SIZE or not core.selectByIndex(idx):
                self.out("Cannot select!")
                return False
            return True
        if name in ("left", "right"):
            if not core.selectAdjacent(LEFT if name == "left" else RIGHT):
                self.out("Nothing selected!")
                return False
            return True
        if name in ("hi", "lo", "rand"):
            if name == "rand":
                outcome = core.randomGuess()
            else:
                outcome = core.guess(HIGHER if name == "hi" else LOWER)
            if not outcome.applicable:
                self.out("Cannot guess!")
                return False
            return True
        if name == "new":
            try:
                core.restart()
            except (DeckSourceError, InvalidDeckError) as e:
                self.out(f"Could not get a new deck: {e}")
                return False
            return True
        if name == "snap":
            if len(parts) < 2:
                self.out("Missing path!")
                return False
            try:
                path = save_board_image(CoreAdapter.snapshot(core), parts[1])
            except OSError as e:
                self.out(f"Cannot save image! {e}")
                return False
            self.out(f"Saved {path}")
            return True
        self.out("Invalid command! " + HELP)
        return False


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    settings = load_settings()
    interface = CommandLineInterface()
    core = GameEngine(makeDeckSource(settings))
    core.registerInterface(interface)
    try:
        core.startGame()
    except (DeckSourceError, InvalidDeckError) as e:
        print(f"Could not get a deck: {e}")
        return
    print(HELP)
    while True:
        try:
            command = input()
        except EOFError:
            break
        if command.strip() == "quit":
            break
        if core.state.status in (WON, LOST) and command.strip() != "new":
            print("Game over, type 'new' to play again.")
            continue
        interface.execute(command)


if __name__ == '__main__':
    main()
