from beatdeck.Core import HIGHER, IN_PROGRESS, FlipStack, GameEngine, GameEvent, GuessCard, SelectStack
from beatdeck_ui.view_model import GameViewModel, StackView


class CoreAdapter:
    """Bridges the engine state/events to a renderer-friendly model."""

    @staticmethod
    def snapshot(engine: GameEngine) -> GameViewModel:
        state = engine.state
        if state is None:
            return GameViewModel(stacks=(), selected_index=None, remaining_count=0, status=IN_PROGRESS, result="")
        stacks = tuple(
            StackView(
                index=i,
                value=stack.card.value,
                suit=stack.card.suit,
                label=stack.card.gameStr(),
                rank_label=stack.card.label(),
                flipped=stack.flipped,
                selected=state.selectedIndex == i,
            )
            for i, stack in enumerate(state.stacks)
        )
        return GameViewModel(
            stacks=stacks,
            selected_index=state.selectedIndex,
            remaining_count=len(state.drawPile),
            status=state.status,
            result=state.result,
        )

    @staticmethod
    def event_to_message(event: GameEvent) -> str:
        if isinstance(event, SelectStack):
            return f"Stack {event.index + 1} selected"
        if isinstance(event, GuessCard):
            outcome = event.outcome
            word = "higher" if event.direction == HIGHER else "lower"
            verdict = "correct" if outcome.correct else "wrong"
            return f"Guessed {word} on stack {outcome.index + 1}: drew {outcome.drawnCard.gameStr()}, {verdict}"
        if isinstance(event, FlipStack):
            return f"Stack {event.index + 1} flipped"
        return type(event).__name__
