from dataclasses import dataclass


@dataclass(frozen=True)
class StackView:
    index: int
    value: str
    suit: str
    label: str
    rank_label: str
    flipped: bool
    selected: bool


@dataclass(frozen=True)
class GameViewModel:
    stacks: tuple[StackView, ...]
    selected_index: int | None
    remaining_count: int
    status: str
    result: str
