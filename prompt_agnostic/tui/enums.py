from enum import Enum


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"


SCORE_STYLES: tuple[tuple[int, UIStyle], ...] = (
    (90, UIStyle.GREEN),
    (70, UIStyle.YELLOW),
)


def score_style(score: int) -> str:
    for threshold, style in SCORE_STYLES:
        if score >= threshold:
            return style.value
    return UIStyle.RED.value
